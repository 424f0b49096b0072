"""Plain-text normalization for extracted article content.

Two policies are supported:

- ``collapse``: every run of whitespace becomes a single ASCII space and the
  result is trimmed.
- ``soft_break``: as ``collapse``, but a token longer than the threshold is
  followed by a newline instead of a space, bounding line length in
  text-only output.

Both policies are idempotent: normalizing an already normalized string
returns it unchanged. Neither drops or alters a word, so
``normalize_text(s).split() == s.split()`` for any ``s``.
"""

from enum import Enum
from typing import Iterable


DEFAULT_SOFT_BREAK_THRESHOLD = 30


class NormalizationPolicy(str, Enum):
    """How extracted text is normalized."""

    COLLAPSE = "collapse"
    SOFT_BREAK = "soft_break"


def collapse_whitespace(text: str) -> str:
    """Collapse every run of whitespace to one space and trim the ends.

    Example:
        >>> collapse_whitespace("  Hello \\n\\t World  ")
        'Hello World'
    """
    return " ".join(text.split())


def soft_break_long_tokens(text: str, threshold: int = DEFAULT_SOFT_BREAK_THRESHOLD) -> str:
    """Collapse whitespace, breaking the line after any token longer than `threshold`.

    Example:
        >>> soft_break_long_tokens("see https://example.com/a/very/long/path/indeed now", 20)
        'see https://example.com/a/very/long/path/indeed\\nnow'
    """
    tokens = text.split()
    parts: list[str] = []
    for index, token in enumerate(tokens):
        parts.append(token)
        if index < len(tokens) - 1:
            parts.append("\n" if len(token) > threshold else " ")
    return "".join(parts)


def normalize_text(
    text: str,
    policy: NormalizationPolicy | str = NormalizationPolicy.COLLAPSE,
    soft_break_threshold: int = DEFAULT_SOFT_BREAK_THRESHOLD,
) -> str:
    """Normalize text according to a policy.

    Args:
        text: Text to normalize
        policy: A NormalizationPolicy or its string value
        soft_break_threshold: Token length that triggers a break under ``soft_break``

    Returns:
        The normalized text

    Raises:
        ValueError: If `policy` is not a known policy
    """
    policy = NormalizationPolicy(policy)
    if policy is NormalizationPolicy.SOFT_BREAK:
        return soft_break_long_tokens(text, soft_break_threshold)
    return collapse_whitespace(text)


def join_fragments(
    fragments: Iterable[str],
    policy: NormalizationPolicy | str = NormalizationPolicy.COLLAPSE,
    soft_break_threshold: int = DEFAULT_SOFT_BREAK_THRESHOLD,
) -> str:
    """Join text-node fragments with a single space, then normalize the result."""
    return normalize_text(" ".join(fragments), policy, soft_break_threshold)
