"""Writes the dated digest artifacts to the output directory."""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass
class DigestArtifacts:
    """Paths of the files produced for one digest.

    Attributes:
        html_path: HTML digest
        text_path: Plain-text digest
        pdf_path: PDF digest, or None when no PDF was produced
    """

    html_path: Path
    text_path: Path
    pdf_path: Path | None = None

    @property
    def paths(self) -> list[Path]:
        """Return every produced file, in summary order."""
        files = [self.html_path, self.text_path]
        if self.pdf_path is not None:
            files.append(self.pdf_path)
        return files


def digest_basename(day: date) -> str:
    """Return the file stem for a digest, e.g. "2026-10-18"."""
    return day.strftime("%Y-%m-%d")


def pdf_path_for(artifacts: DigestArtifacts) -> Path:
    """Return where the PDF sibling of an HTML digest belongs."""
    return artifacts.html_path.with_suffix(".pdf")


def write_digest(
    html: str,
    text: str,
    output_dir: str | Path,
    day: date,
) -> DigestArtifacts:
    """Write the HTML and plain-text digests named after `day`.

    Creates the output directory (expanding ``~``) if it does not exist.
    Files are encoded as UTF-8 and overwrite an earlier digest of the same day.

    Args:
        html: Rendered HTML document
        text: Plain-text rendition
        output_dir: Directory receiving the files
        day: Digest date, used for the file names

    Returns:
        DigestArtifacts with the written paths

    Raises:
        OSError: If the directory cannot be created or a file cannot be written

    Example:
        >>> artifacts = write_digest(html, text, "~/hn_daily", date(2026, 10, 18))
        >>> artifacts.html_path.name
        '2026-10-18.html'
    """
    output_path = Path(output_dir).expanduser()
    output_path.mkdir(parents=True, exist_ok=True)

    stem = digest_basename(day)
    html_path = output_path / f"{stem}.html"
    text_path = output_path / f"{stem}.txt"

    html_path.write_text(html, encoding="utf-8")
    text_path.write_text(text, encoding="utf-8")

    logger.info(f"Digest written to {html_path} and {text_path}")
    return DigestArtifacts(html_path=html_path, text_path=text_path)
