"""Hacker News top story listing.

Fetches the ordered top-story id list and the detail record of each listed
item. Listing is fail-fast: any failure on the id list or on a single item
aborts the whole listing with a ListingError and no partial result. Per-story
recovery only happens later, during content acquisition.
"""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from hn_daily.config.settings import Settings


logger = logging.getLogger(__name__)


class ListingError(Exception):
    """Raised when the top-story list or an item record cannot be fetched or parsed.

    Attributes:
        url: The listing API URL that failed
        cause: Description of the failure

    Example:
        >>> raise ListingError("https://hacker-news.firebaseio.com/v0/item/1.json", "timed out")
        ListingError: Listing request to 'https://hacker-news.firebaseio.com/v0/item/1.json' failed: timed out
    """

    def __init__(self, url: str, cause: str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Listing request to '{url}' failed: {cause}")


@dataclass(frozen=True)
class Story:
    """Immutable snapshot of one Hacker News item.

    Attributes:
        id: Item identifier
        author: Submitter's username, if present
        score: Points, if present
        title: Story title, if present
        url: External link; absent for discussion-only posts (Ask HN, etc.)
        comment_count: Number of comments (``descendants``), if present
        time: Submission time as a Unix timestamp, if present
    """

    id: int
    author: str | None = None
    score: int | None = None
    title: str | None = None
    url: str | None = None
    comment_count: int | None = None
    time: int | None = None

    @property
    def has_link(self) -> bool:
        """Return True when the story points to a non-empty external URL."""
        return bool(self.url)


def _optional_str(record: dict[str, Any], key: str) -> str | None:
    value = record.get(key)
    return value if isinstance(value, str) else None


def _optional_int(record: dict[str, Any], key: str) -> int | None:
    value = record.get(key)
    # bool is an int subclass, but never a meaningful count
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def parse_story(record: Any, url: str = "<item>") -> Story:
    """Parse an item record from the listing API into a Story.

    Optional fields of the wrong type are treated as absent. The ``id`` field
    is required.

    Args:
        record: Decoded JSON value returned by the item endpoint
        url: Item URL, used for error reporting

    Returns:
        The parsed Story

    Raises:
        ListingError: If the record is not an object (deleted items come back
            as ``null``) or has no integer ``id``
    """
    if not isinstance(record, dict):
        raise ListingError(url, f"expected a JSON object, got {type(record).__name__}")

    story_id = _optional_int(record, "id")
    if story_id is None:
        raise ListingError(url, "item record is missing an integer 'id' field")

    return Story(
        id=story_id,
        author=_optional_str(record, "by"),
        score=_optional_int(record, "score"),
        title=_optional_str(record, "title"),
        url=_optional_str(record, "url"),
        comment_count=_optional_int(record, "descendants"),
        time=_optional_int(record, "time"),
    )


class StoryLister:
    """Lists the current top stories from the Hacker News API.

    Items are requested one at a time, synchronously, in list order. There is
    no retry and no concurrency.

    Attributes:
        settings: Configuration with endpoints, timeout and user agent
        session: HTTP session used for every listing request
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.settings = settings
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            "User-Agent": self.settings.listing_user_agent,
            "Accept": "application/json",
        })
        return session

    def fetch(self, limit: int) -> list[Story]:
        """Fetch the top `limit` stories in the order the API ranks them.

        Args:
            limit: Maximum number of stories to return

        Returns:
            List of Story objects, at most `limit` items, in top-list order

        Raises:
            ValueError: If limit is negative
            ListingError: On any failure fetching or parsing the id list or
                any single item. No partial list is returned.
        """
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        ids = self._fetch_top_ids()
        selected = ids[:limit]
        logger.info(f"Listing {len(selected)} of {len(ids)} top stories")

        stories: list[Story] = []
        for story_id in selected:
            url = self.settings.item_url(story_id)
            stories.append(parse_story(self._fetch_json(url), url))
            logger.debug(f"Listed item {story_id}")

        return stories

    def _fetch_top_ids(self) -> list[int]:
        url = self.settings.top_stories_url
        payload = self._fetch_json(url)

        if not isinstance(payload, list):
            raise ListingError(url, f"expected a JSON list, got {type(payload).__name__}")

        ids: list[int] = []
        for value in payload:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ListingError(url, f"invalid story id {value!r}")
            ids.append(value)
        return ids

    def _fetch_json(self, url: str) -> Any:
        """GET a listing URL and decode its JSON body.

        Raises:
            ListingError: On network errors, non-success status or a non-JSON body
        """
        try:
            response = self.session.get(url, timeout=self.settings.listing_timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ListingError(url, str(e)) from e

        try:
            return response.json()
        except ValueError as e:
            raise ListingError(url, f"invalid JSON body: {e}") from e
