"""Tests for the command line entry point and runner.

Feature: hn-daily
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from hn_daily.agent.runner import (
    EXIT_CONFIG_ERROR,
    EXIT_LISTING_ERROR,
    EXIT_PIPELINE_ERROR,
    EXIT_SUCCESS,
    apply_overrides,
    print_summary,
    run,
)
from hn_daily.config.settings import ConfigurationError, Settings
from hn_daily.engines.digest_writer import DigestArtifacts
from hn_daily.engines.story_lister import ListingError
from hn_daily.main import main, parse_args


LOAD_SETTINGS = "hn_daily.agent.runner.load_settings"
RUN_PIPELINE = "hn_daily.agent.runner.run_pipeline"


def make_workflow_result(pdf: bool = False) -> MagicMock:
    result = MagicMock()
    result.artifacts = DigestArtifacts(
        html_path=Path("/out/2026-10-18.html"),
        text_path=Path("/out/2026-10-18.txt"),
        pdf_path=Path("/out/2026-10-18.pdf") if pdf else None,
    )
    return result


class TestParseArgs:
    """Tests for command line parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.limit is None
        assert args.output_dir is None
        assert args.no_pdf is False
        assert args.normalization is None
        assert args.verbose is False

    def test_all_options(self):
        args = parse_args([
            "--limit", "10",
            "--output-dir", "/tmp/hn",
            "--no-pdf",
            "--normalization", "soft_break",
            "-v",
        ])

        assert args.limit == 10
        assert args.output_dir == "/tmp/hn"
        assert args.no_pdf is True
        assert args.normalization == "soft_break"
        assert args.verbose is True

    def test_unknown_normalization_is_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--normalization", "squash"])

    def test_non_integer_limit_is_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--limit", "ten"])


class TestApplyOverrides:
    """Tests for command line overrides of loaded settings."""

    def test_overrides_replace_settings(self):
        settings = apply_overrides(
            Settings(), limit=5, output_dir="/tmp/x", no_pdf=True, normalization="soft_break"
        )

        assert settings.story_limit == 5
        assert settings.output_dir == "/tmp/x"
        assert settings.pdf_enabled is False
        assert settings.normalization_policy == "soft_break"

    def test_no_overrides_keep_settings(self):
        assert apply_overrides(Settings()) == Settings()

    def test_invalid_override_raises(self):
        with pytest.raises(ConfigurationError):
            apply_overrides(Settings(), limit=0)


class TestRun:
    """Tests for exit codes of a run."""

    def test_success_prints_summary(self, capsys):
        with patch(LOAD_SETTINGS, return_value=Settings()), \
                patch(RUN_PIPELINE, return_value=make_workflow_result()) as pipeline:
            exit_code = run(limit=3)

        assert exit_code == EXIT_SUCCESS
        assert pipeline.call_args.args[0].story_limit == 3
        out = capsys.readouterr().out
        assert "Files generated in /out" in out
        assert "- 2026-10-18.html - HTML digest" in out
        assert "- 2026-10-18.txt - Plain text digest" in out
        assert "PDF digest" not in out

    def test_invalid_configuration_returns_config_error(self):
        with patch(LOAD_SETTINGS, return_value=Settings(text_width=5)), \
                patch(RUN_PIPELINE) as pipeline:
            exit_code = run()

        assert exit_code == EXIT_CONFIG_ERROR
        pipeline.assert_not_called()

    def test_listing_error_returns_listing_exit_code(self):
        error = ListingError("https://hn.test/top.json", "timed out")
        with patch(LOAD_SETTINGS, return_value=Settings()), patch(RUN_PIPELINE, side_effect=error):
            assert run() == EXIT_LISTING_ERROR

    def test_unexpected_error_returns_pipeline_exit_code(self):
        with patch(LOAD_SETTINGS, return_value=Settings()), \
                patch(RUN_PIPELINE, side_effect=PermissionError("read-only")):
            assert run() == EXIT_PIPELINE_ERROR

    def test_main_forwards_arguments(self):
        with patch("hn_daily.main.run", return_value=EXIT_SUCCESS) as runner:
            assert main(["--limit", "4", "--no-pdf"]) == EXIT_SUCCESS

        runner.assert_called_once_with(
            limit=4, output_dir=None, no_pdf=True, normalization=None, verbose=False
        )

    def test_summary_lists_pdf_when_present(self, capsys):
        print_summary(make_workflow_result(pdf=True))

        assert "- 2026-10-18.pdf - PDF digest" in capsys.readouterr().out
