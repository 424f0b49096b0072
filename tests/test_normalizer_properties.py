"""Property-based tests for plain-text normalization.

Feature: hn-daily
"""

import pytest
from hypothesis import given, settings, strategies as st

from hn_daily.engines.text_normalizer import (
    NormalizationPolicy,
    collapse_whitespace,
    join_fragments,
    normalize_text,
    soft_break_long_tokens,
)


# Text with plenty of mixed whitespace runs
messy_text = st.text(
    alphabet=st.sampled_from(list("abcXYZ019.,-/: \n\t\r") + ["\u00a0"]),
    max_size=200,
)

policies = st.sampled_from(list(NormalizationPolicy))


# Feature: hn-daily, Property: Normalization Idempotence
class TestNormalizationIdempotence:
    """Normalizing normalized text SHALL return it unchanged."""

    @given(text=st.text(max_size=300), policy=policies, threshold=st.integers(1, 60))
    @settings(max_examples=100)
    def test_normalize_is_idempotent(self, text: str, policy, threshold: int):
        once = normalize_text(text, policy, threshold)
        assert normalize_text(once, policy, threshold) == once

    @given(text=messy_text, policy=policies, threshold=st.integers(1, 60))
    @settings(max_examples=100)
    def test_normalize_preserves_every_word(self, text: str, policy, threshold: int):
        """Normalization SHALL neither drop nor alter any word."""
        assert normalize_text(text, policy, threshold).split() == text.split()


# Feature: hn-daily, Property: Whitespace Collapse
class TestCollapsePolicy:
    """The collapse policy SHALL leave single spaces only."""

    @given(text=messy_text)
    @settings(max_examples=100)
    def test_no_whitespace_runs_or_edges(self, text: str):
        result = normalize_text(text, NormalizationPolicy.COLLAPSE)

        assert "  " not in result
        assert "\n" not in result
        assert "\t" not in result
        assert result == result.strip()

    def test_collapse_example(self):
        assert collapse_whitespace("  Hello \n\t World  ") == "Hello World"

    def test_policy_accepts_string_value(self):
        assert normalize_text(" a  b ", "collapse") == "a b"

    def test_empty_text(self):
        assert normalize_text("") == ""
        assert normalize_text(" \n\t ") == ""


# Feature: hn-daily, Property: Soft Break Placement
class TestSoftBreakPolicy:
    """The soft_break policy SHALL break lines only after long tokens."""

    @given(
        tokens=st.lists(
            st.text(alphabet="abcdefghij/.:", min_size=1, max_size=50), min_size=1, max_size=30
        ),
        threshold=st.integers(min_value=1, max_value=40),
    )
    @settings(max_examples=100)
    def test_newline_follows_exactly_the_long_tokens(self, tokens: list[str], threshold: int):
        result = soft_break_long_tokens("   ".join(tokens), threshold)

        expected = ""
        for index, token in enumerate(tokens):
            expected += token
            if index < len(tokens) - 1:
                expected += "\n" if len(token) > threshold else " "
        assert result == expected

    def test_long_url_is_followed_by_a_break(self):
        url = "https://example.com/" + "segment/" * 5
        result = normalize_text(f"read {url} today", NormalizationPolicy.SOFT_BREAK, 30)
        assert result == f"read {url}\ntoday"

    def test_token_at_threshold_does_not_break(self):
        token = "x" * 30
        assert normalize_text(f"{token} next", "soft_break", 30) == f"{token} next"

    def test_trailing_long_token_has_no_trailing_newline(self):
        token = "y" * 40
        assert normalize_text(f"start {token}  ", "soft_break", 30) == f"start {token}"


class TestJoinFragments:
    """Unit tests for joining text-node fragments."""

    def test_fragments_are_joined_with_single_spaces(self):
        assert join_fragments(["Hello", "  world\n", "", "again"]) == "Hello world again"

    def test_adjacent_fragments_do_not_merge_words(self):
        assert join_fragments(["first", "second"]) == "first second"

    def test_no_fragments_give_empty_text(self):
        assert join_fragments([]) == ""

    def test_soft_break_policy_is_forwarded(self):
        long_token = "z" * 12
        assert join_fragments(["a", long_token, "b"], "soft_break", 10) == f"a {long_token}\nb"

    @pytest.mark.parametrize("policy", ["squash", "", "COLLAPSE"])
    def test_unknown_policy_raises_value_error(self, policy):
        with pytest.raises(ValueError):
            normalize_text("text", policy)
