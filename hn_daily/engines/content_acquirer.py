"""Per-story article acquisition.

For every listed story the acquirer fetches the linked page, applies the
paywall heuristic, extracts readable content and normalizes it to plain
text. Failures are isolated per story: a story that cannot be fetched or
extracted is recorded as unavailable and the run moves on. Results are
collected positionally, so slot i always belongs to story i.
"""

import logging
from dataclasses import dataclass
from typing import Sequence
from urllib.parse import urlsplit

import requests

from hn_daily.config.settings import Settings
from hn_daily.engines.extractor import (
    ContentExtractor,
    ExtractionError,
    ReadabilityExtractor,
    SoupTextQuery,
    TextQuery,
)
from hn_daily.engines.story_lister import Story
from hn_daily.engines.text_normalizer import join_fragments


logger = logging.getLogger(__name__)


HTML_MEDIA_TYPES = frozenset({"text/html", "application/xhtml+xml"})

NO_LINK_REASON = "no external link"


class ContentFetchError(Exception):
    """Raised when a story's linked page cannot be retrieved.

    Attributes:
        url: The article URL
        cause: Network error or non-success status description
    """

    def __init__(self, url: str, cause: str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Could not fetch '{url}': {cause}")


@dataclass(frozen=True)
class ExtractedContent:
    """Readable content acquired for one story.

    Attributes:
        title: Title detected by the extractor
        text: Normalized plain text of the article
        content_html: Extracted article HTML, embedded verbatim in the digest
        is_paywalled: True when the paywall heuristic flagged the page
        domain: Host component of the story URL
    """

    title: str
    text: str
    content_html: str
    is_paywalled: bool
    domain: str


@dataclass(frozen=True)
class AcquisitionResult:
    """Outcome of acquiring one story: content, or the reason there is none.

    Attributes:
        content: The acquired content, or None when unavailable
        reason: Why the content is unavailable (None on success)
        skipped: True when no request was made because the story has no link
    """

    content: ExtractedContent | None
    reason: str | None = None
    skipped: bool = False

    @property
    def available(self) -> bool:
        return self.content is not None


def detect_paywall(content_type: str | None) -> bool:
    """Classify a response as paywalled/blocked from its declared content type.

    Anything that is not an HTML media type (including a missing header) is
    flagged. This is a coarse heuristic; cookies and redirect chains are not
    inspected.

    Example:
        >>> detect_paywall("text/html; charset=utf-8")
        False
        >>> detect_paywall("application/pdf")
        True
    """
    if not content_type:
        return True
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type not in HTML_MEDIA_TYPES


def extract_domain(url: str) -> str:
    """Return the host component of a URL.

    Raises:
        ExtractionError: If the URL cannot be parsed or has no host
    """
    try:
        host = urlsplit(url).hostname
    except ValueError as e:
        raise ExtractionError(url, f"invalid URL: {e}") from e
    if not host:
        raise ExtractionError(url, "no host in URL")
    return host


class ContentAcquirer:
    """Fetches and extracts the linked article of each story, one at a time.

    Attributes:
        settings: Configuration with timeout, user agent and text policy
        extractor: Readable-content extraction capability
        text_query: Text-node query capability used for plain-text derivation
        session: HTTP session carrying browser-like headers
    """

    def __init__(
        self,
        settings: Settings,
        extractor: ContentExtractor | None = None,
        text_query: TextQuery | None = None,
        session: requests.Session | None = None,
    ):
        self.settings = settings
        self.extractor = extractor or ReadabilityExtractor()
        self.text_query = text_query or SoupTextQuery()
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        # Article sites see a desktop browser
        session = requests.Session()
        session.headers.update({
            "User-Agent": self.settings.browser_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        })
        return session

    def acquire(self, stories: Sequence[Story]) -> list[ExtractedContent | None]:
        """Acquire content for each story.

        Returns:
            One entry per story in the same order: the content, or None when
            the story's content is unavailable
        """
        return [result.content for result in self.acquire_all(stories)]

    def acquire_all(self, stories: Sequence[Story]) -> list[AcquisitionResult]:
        """Acquire content for each story, keeping the reason for every miss.

        Per-story fetch and extraction failures are logged and recorded as
        unavailable; they never abort the batch.

        Returns:
            One AcquisitionResult per story, positionally aligned with `stories`
        """
        results: list[AcquisitionResult] = []

        for story in stories:
            if not story.has_link:
                logger.debug(f"Story {story.id} has no external link, skipping")
                results.append(AcquisitionResult(None, NO_LINK_REASON, skipped=True))
                continue

            url = story.url
            logger.info(f"Fetching: {url}")
            try:
                results.append(AcquisitionResult(self._acquire_one(url)))
            except (ContentFetchError, ExtractionError) as e:
                logger.warning(f"Failed to fetch {url}: {e.cause}")
                results.append(AcquisitionResult(None, e.cause))

        return results

    def _acquire_one(self, url: str) -> ExtractedContent:
        response = self._fetch(url)
        is_paywalled = detect_paywall(response.headers.get("Content-Type"))
        if is_paywalled:
            logger.debug(f"Non-HTML content type for {url}, flagging as paywalled")

        domain = extract_domain(url)
        base_url = response.url or url
        markup = response.text

        try:
            article = self.extractor.extract(markup, base_url)
            fragments = self.text_query.query_text(article.content_html)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(url, str(e)) from e

        text = join_fragments(
            fragments,
            self.settings.normalization_policy,
            self.settings.soft_break_threshold,
        )

        return ExtractedContent(
            title=article.title,
            text=text,
            content_html=article.content_html,
            is_paywalled=is_paywalled,
            domain=domain,
        )

    def _fetch(self, url: str) -> requests.Response:
        """GET an article page.

        Raises:
            ContentFetchError: On network errors or a non-success status
        """
        try:
            response = self.session.get(url, timeout=self.settings.content_timeout_seconds)
        except requests.RequestException as e:
            raise ContentFetchError(url, f"Request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ContentFetchError(url, f"Failed with status: {response.status_code}")

        return response
