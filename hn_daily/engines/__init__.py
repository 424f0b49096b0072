"""Engines module - listing, acquisition and rendering components."""

from hn_daily.engines.content_acquirer import (
    AcquisitionResult,
    ContentAcquirer,
    ContentFetchError,
    ExtractedContent,
)
from hn_daily.engines.digest_renderer import render_html
from hn_daily.engines.extractor import ExtractionError
from hn_daily.engines.story_lister import ListingError, Story, StoryLister
from hn_daily.engines.text_normalizer import NormalizationPolicy, normalize_text
from hn_daily.engines.text_renderer import html_to_text

__all__ = [
    # Listing
    "Story",
    "StoryLister",
    # Acquisition
    "AcquisitionResult",
    "ContentAcquirer",
    "ExtractedContent",
    "NormalizationPolicy",
    "normalize_text",
    # Rendering
    "render_html",
    "html_to_text",
    # Exceptions
    "ListingError",
    "ContentFetchError",
    "ExtractionError",
]
