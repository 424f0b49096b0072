"""Readable-content extraction capabilities.

The acquirer depends only on the two protocols defined here, so tests can
drive it with fakes. The default implementations wrap readability-lxml for
main-content extraction and BeautifulSoup for text-node queries.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.element import CData, NavigableString
from lxml import etree
from lxml import html as lxml_html
from readability import Document
from readability.readability import Unparseable


logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when readable content cannot be derived from a fetched page.

    Covers malformed markup, pages without discoverable main content and
    story URLs whose host cannot be determined.

    Attributes:
        url: URL of the page being processed
        cause: Description of the failure
    """

    def __init__(self, url: str, cause: str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Could not extract content from '{url}': {cause}")


@dataclass(frozen=True)
class ExtractedArticle:
    """Raw output of a content extractor.

    Attributes:
        title: Article title as detected by the extractor
        content_html: HTML fragment holding the main article content
    """

    title: str
    content_html: str


@runtime_checkable
class ContentExtractor(Protocol):
    """Reduces a full page to its main article content."""

    def extract(self, markup: str, base_url: str) -> ExtractedArticle:
        """Extract the article from `markup`, resolving links against `base_url`.

        Raises:
            ExtractionError: If no article content can be produced
        """
        ...


@runtime_checkable
class TextQuery(Protocol):
    """Lists the text nodes of an HTML fragment in document order."""

    def query_text(self, html: str) -> list[str]:
        ...


class ReadabilityExtractor:
    """ContentExtractor backed by readability-lxml."""

    def extract(self, markup: str, base_url: str) -> ExtractedArticle:
        if not markup or not markup.strip():
            raise ExtractionError(base_url, "empty document")

        try:
            document = Document(markup, url=base_url)
            content_html = document.summary(html_partial=True)
            title = document.short_title()
        except (Unparseable, etree.LxmlError, ValueError) as e:
            raise ExtractionError(base_url, f"unparseable markup: {e}") from e

        if not content_html or not _has_text(content_html):
            raise ExtractionError(base_url, "no readable content found")

        logger.debug(f"Extracted {len(content_html)} characters of content from {base_url}")
        return ExtractedArticle(title=title or "", content_html=content_html)


def _has_text(fragment: str) -> bool:
    try:
        return bool(lxml_html.fromstring(fragment).text_content().strip())
    except (etree.LxmlError, ValueError):
        return False


class SoupTextQuery:
    """TextQuery backed by BeautifulSoup.

    Only real text nodes are returned; comments, doctypes and processing
    instructions are skipped.
    """

    def __init__(self, parser: str = "lxml"):
        self.parser = parser

    def query_text(self, html: str) -> list[str]:
        soup = BeautifulSoup(html, self.parser)
        return [
            str(node)
            for node in soup.find_all(string=True)
            if type(node) in (NavigableString, CData)
        ]
