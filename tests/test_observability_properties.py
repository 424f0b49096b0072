"""Property-based tests for observability and run metrics.

Feature: hn-daily
"""

import json
import logging
import tempfile
from datetime import datetime
from pathlib import Path

from hypothesis import given, settings, strategies as st

from hn_daily.engines.content_acquirer import AcquisitionResult, ExtractedContent, NO_LINK_REASON
from hn_daily.engines.observability import (
    RunMetrics,
    create_run_metrics,
    log_stage_counts,
    summarize_results,
    write_run_log,
)
from hn_daily.engines.story_lister import Story


def make_content(is_paywalled: bool = False) -> ExtractedContent:
    return ExtractedContent("T", "text", "<p>text</p>", is_paywalled, "example.com")


OUTCOMES = ["acquired", "paywalled", "skipped", "failed"]


def build_outcome(index: int, outcome: str) -> tuple[Story, AcquisitionResult]:
    if outcome == "skipped":
        return Story(id=index), AcquisitionResult(None, NO_LINK_REASON, skipped=True)
    story = Story(id=index, url=f"https://site{index}.example.com/")
    if outcome == "failed":
        return story, AcquisitionResult(None, "Failed with status: 404")
    return story, AcquisitionResult(make_content(is_paywalled=outcome == "paywalled"))


# Feature: hn-daily, Property: Run Metrics Accounting
class TestSummarizeResults:
    """Run metrics SHALL account for every listed story."""

    @given(outcomes=st.lists(st.sampled_from(OUTCOMES), max_size=40))
    @settings(max_examples=100)
    def test_counts_add_up(self, outcomes: list[str]):
        pairs = [build_outcome(i, outcome) for i, outcome in enumerate(outcomes)]
        stories = [story for story, _ in pairs]
        results = [result for _, result in pairs]

        metrics = summarize_results(stories, results)

        assert metrics.listed_count == len(outcomes)
        assert metrics.acquired_count + metrics.unavailable_count == metrics.listed_count
        assert metrics.acquired_count == sum(o in ("acquired", "paywalled") for o in outcomes)
        assert metrics.paywalled_count == outcomes.count("paywalled")
        assert metrics.skipped_count == outcomes.count("skipped")
        assert len(metrics.errors) == outcomes.count("failed")

    def test_errors_name_the_failing_url(self):
        story, result = build_outcome(3, "failed")

        metrics = summarize_results([story], [result])

        assert metrics.errors == ["https://site3.example.com/: Failed with status: 404"]

    def test_uses_given_timestamp(self):
        ts = datetime(2026, 10, 18, 7, 30, 0)
        assert summarize_results([], [], ts).run_timestamp == ts


class TestRunLog:
    """Tests for the JSON run log."""

    @given(
        listed=st.integers(min_value=0, max_value=500),
        acquired=st.integers(min_value=0, max_value=500),
        errors=st.lists(st.text(max_size=40), max_size=5),
        pdf_status=st.sampled_from(["success", "failed", "skipped", "pending"]),
    )
    @settings(max_examples=50)
    def test_run_log_contains_all_metrics(self, listed, acquired, errors, pdf_status):
        metrics = create_run_metrics(
            listed_count=listed,
            acquired_count=acquired,
            unavailable_count=max(listed - acquired, 0),
            artifacts=["2026-10-18.html", "2026-10-18.txt"],
            pdf_status=pdf_status,
            errors=errors,
            run_timestamp=datetime(2026, 10, 18, 7, 30, 5),
        )

        with tempfile.TemporaryDirectory() as tmp_dir:
            filepath = write_run_log(metrics, tmp_dir)
            data = json.loads(Path(filepath).read_text(encoding="utf-8"))

        assert Path(filepath).name == "run_log_20261018_073005.json"
        assert data["listed_count"] == listed
        assert data["acquired_count"] == acquired
        assert data["errors"] == errors
        assert data["pdf_status"] == pdf_status
        assert data["artifacts"] == ["2026-10-18.html", "2026-10-18.txt"]
        assert data["run_timestamp"] == "2026-10-18T07:30:05"

    def test_run_log_creates_directory(self, tmp_path):
        target = tmp_path / "logs"

        filepath = write_run_log(RunMetrics(), target)

        assert Path(filepath).parent == target
        assert Path(filepath).exists()


class TestMetricsDefaults:
    """Tests for metric construction helpers."""

    def test_create_run_metrics_defaults(self):
        metrics = create_run_metrics()

        assert metrics.listed_count == 0
        assert metrics.artifacts == []
        assert metrics.errors == []
        assert metrics.pdf_status == "pending"
        assert isinstance(metrics.run_timestamp, datetime)

    def test_default_lists_are_not_shared(self):
        first, second = RunMetrics(), RunMetrics()
        first.errors.append("x")
        assert second.errors == []

    def test_log_stage_counts(self, caplog):
        with caplog.at_level(logging.INFO):
            log_stage_counts("acquired", 24)
        assert "Pipeline stage 'acquired': 24 stories" in caplog.text
