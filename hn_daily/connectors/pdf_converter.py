"""Optional HTML-to-PDF export through an external converter (wkhtmltopdf)."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Raised internally when the converter is missing or fails.

    Never escapes PdfConverter.convert; failures are reported through
    ConversionResult instead.
    """

    pass


@dataclass
class ConversionResult:
    """Result of a PDF conversion attempt."""

    success: bool
    output_path: str | None
    error: str | None


class PdfConverter:
    """Best-effort wrapper around an HTML-to-PDF command line tool.

    The converter's presence on PATH is checked once and cached, so the
    workflow can decide up front whether to attempt the export.

    Attributes:
        command: Executable name or path (default "wkhtmltopdf")
        timeout_seconds: Upper bound on a single conversion
    """

    def __init__(self, command: str = "wkhtmltopdf", timeout_seconds: float = 120.0):
        self.command = command
        self.timeout_seconds = timeout_seconds
        self._executable: str | None = None
        self._checked = False

    def is_available(self) -> bool:
        """Return True if the converter executable can be found on PATH."""
        if not self._checked:
            self._executable = shutil.which(self.command)
            self._checked = True
            if self._executable is None:
                logger.debug(f"PDF converter '{self.command}' not found on PATH")
        return self._executable is not None

    def convert(self, html_path: str | Path, pdf_path: str | Path) -> ConversionResult:
        """Convert an HTML file to PDF.

        Args:
            html_path: Path to the HTML digest
            pdf_path: Path of the PDF to produce

        Returns:
            ConversionResult with success status and output path or error message
        """
        try:
            self._run(Path(html_path), Path(pdf_path))
        except ConversionError as e:
            logger.debug(f"PDF conversion skipped: {e}")
            return ConversionResult(success=False, output_path=None, error=str(e))

        logger.info(f"PDF digest written to {pdf_path}")
        return ConversionResult(success=True, output_path=str(pdf_path), error=None)

    def _run(self, html_path: Path, pdf_path: Path) -> None:
        if not self.is_available():
            raise ConversionError(f"'{self.command}' is not installed")

        # A PDF left from an earlier run must not pass for this run's output
        try:
            pdf_path.unlink(missing_ok=True)
        except OSError as e:
            raise ConversionError(f"could not replace '{pdf_path}': {e}") from e

        try:
            completed = subprocess.run(
                [self._executable, "--quiet", str(html_path), str(pdf_path)],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ConversionError(f"'{self.command}' timed out after {e.timeout}s") from e
        except OSError as e:
            raise ConversionError(f"could not run '{self.command}': {e}") from e

        # wkhtmltopdf exits non-zero on resource warnings; an existing output
        # file counts as success
        if not pdf_path.exists():
            stderr = (completed.stderr or b"").decode("utf-8", errors="replace").strip()
            raise ConversionError(
                f"'{self.command}' exited with status {completed.returncode}"
                + (f": {stderr}" if stderr else "")
            )
