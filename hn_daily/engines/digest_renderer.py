"""HTML digest rendering.

Builds a single self-contained HTML document: a sticky sidebar index with one
entry per story, and one article section per story with its metadata and
either the extracted content or an "unavailable" notice. Index entry i always
links to article section i (anchor ``article-i``).

The page highlights the index entry of the article currently in view. This
is driven by an IntersectionObserver (no scroll polling); clicking an index
entry marks it active immediately.
"""

import logging
from datetime import date
from html import escape
from typing import Sequence
from urllib.parse import urlsplit

from hn_daily.engines.content_acquirer import ExtractedContent
from hn_daily.engines.story_lister import Story


logger = logging.getLogger(__name__)


DIGEST_NAME = "Hacker News Daily"

# Display defaults for absent story fields
DEFAULT_TITLE = "[no title]"
DEFAULT_AUTHOR = "unknown"
DEFAULT_SCORE = 0
DEFAULT_COMMENT_COUNT = 0

PAYWALL_WARNING = "Content may be behind a paywall"
UNAVAILABLE_NOTICE = "Content unavailable"

LINK_SCHEMES = ("http", "https")


DIGEST_CSS = """
body{font-family:Georgia,serif;margin:0;padding:0;display:flex;flex-direction:column;}
h1{text-align:center;margin:0;padding:20px 0 10px 0;}
.date{text-align:center;margin:0 0 20px 0;}
.main-container{display:flex;flex:1;}
.sidebar{position:sticky;top:0;width:280px;height:100vh;overflow-y:auto;background:#f8f8f8;padding:15px;box-sizing:border-box;border-right:1px solid #ddd;}
.sidebar h2{text-align:center;margin-top:0;}
.story-index{padding-left:20px;}
.story-index li{margin-bottom:0.8em;font-size:0.9em;}
.articles{flex:1;padding:20px 40px;max-width:800px;margin:0 auto;}
.story{margin-bottom:1.5em;}
.story h2{font-size:1.3em;margin:1em 0 .1em 0;}
.meta{font-size:.8em;color:#555;margin:0 0 .5em 0;}
.content{font-size:0.85em;margin-top:0.5em;}
.domain{color:#888;font-size:0.9em;margin-bottom:0.3em;}
.full-content{line-height:1.5;margin-top:1em;}
.full-content p{margin:0.7em 0;}
.full-content img{max-width:100%;height:auto;}
.paywall-warning{color:#aa3300;font-style:italic;margin-bottom:0.3em;}
.unavailable{color:#888;}
hr{border:0;border-top:1px solid #ddd;margin:2em 0;}
a{color:#000;text-decoration:none;}
a:hover{text-decoration:underline;}
a.active{font-weight:bold;color:#ff6600;}
@media print{.sidebar{display:none;} .articles{margin:0;max-width:none;} a{color:#000}}
@media (max-width: 800px){.main-container{flex-direction:column;} .sidebar{position:static;width:100%;height:auto;} .articles{max-width:none;}}
"""

# The article crossing the top 30% of the viewport counts as "in view".
ACTIVE_LINK_SCRIPT = """
document.addEventListener('DOMContentLoaded', function () {
  const links = document.querySelectorAll('.story-index a');
  function setActive(id) {
    links.forEach(function (link) {
      link.classList.toggle('active', link.getAttribute('href') === '#' + id);
    });
  }
  const observer = new IntersectionObserver(function (entries) {
    entries.forEach(function (entry) {
      if (entry.isIntersecting) {
        setActive(entry.target.id);
      }
    });
  }, { rootMargin: '0px 0px -70% 0px', threshold: 0 });
  document.querySelectorAll('.story').forEach(function (article) {
    observer.observe(article);
  });
  links.forEach(function (link) {
    link.addEventListener('click', function () {
      setActive(link.getAttribute('href').slice(1));
    });
  });
});
"""


def article_anchor(index: int) -> str:
    """Return the anchor id of the article section at position `index`."""
    return f"article-{index}"


def format_display_date(day: date) -> str:
    """Format a date like "October 18, 2026"."""
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def _display_title(story: Story) -> str:
    return story.title or DEFAULT_TITLE


def format_meta_line(story: Story) -> str:
    """Return the plain metadata line for a story, with defaults for absent fields.

    Example:
        >>> format_meta_line(Story(id=1, score=42, author="pg", comment_count=7))
        '42 points • by pg • 7 comments'
        >>> format_meta_line(Story(id=2))
        '0 points • by unknown • 0 comments'
    """
    score = story.score if story.score is not None else DEFAULT_SCORE
    author = story.author or DEFAULT_AUTHOR
    comments = story.comment_count if story.comment_count is not None else DEFAULT_COMMENT_COUNT
    return f"{score} points • by {author} • {comments} comments"


def _render_index_entry(index: int, story: Story) -> str:
    return (
        f'<li><a href="#{article_anchor(index)}">'
        f"{escape(_display_title(story))}</a></li>"
    )


def _render_content_block(content: ExtractedContent | None) -> str:
    if content is None:
        return (
            '<div class="content">'
            f'<em class="unavailable">{UNAVAILABLE_NOTICE}</em>'
            "</div>"
        )

    paywall_warning = ""
    if content.is_paywalled:
        paywall_warning = f'<div class="paywall-warning">{PAYWALL_WARNING}</div>'

    return (
        '<div class="content">'
        f'<div class="domain">{escape(content.domain)}</div>'
        f"{paywall_warning}"
        f'<div class="full-content">{content.content_html}</div>'
        "</div>"
    )


def link_target(url: str | None) -> str:
    """Return the href for a story link; only http(s) URLs are linked.

    Example:
        >>> link_target("javascript:alert(1)")
        '#'
    """
    if not url:
        return "#"
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        return "#"
    return url if scheme in LINK_SCHEMES else "#"


def _render_article(index: int, story: Story, content: ExtractedContent | None) -> str:
    href = link_target(story.url)
    return (
        f'<article id="{article_anchor(index)}" class="story">'
        f'<h2><a href="{escape(href)}">{escape(_display_title(story))}</a></h2>'
        f'<p class="meta">{escape(format_meta_line(story))}</p>'
        f"{_render_content_block(content)}"
        "</article>\n<hr>\n"
    )


def render_html(
    stories: Sequence[Story],
    contents: Sequence[ExtractedContent | None],
    generated_on: date | None = None,
) -> str:
    """Render the digest as a complete HTML document.

    Args:
        stories: Stories in display order
        contents: Acquired content, positionally aligned with `stories`
            (None where content is unavailable)
        generated_on: Date shown in the title and heading (defaults to today)

    Returns:
        The HTML document

    Raises:
        ValueError: If `stories` and `contents` differ in length
    """
    if len(stories) != len(contents):
        raise ValueError(
            f"stories and contents must be aligned: got {len(stories)} stories "
            f"and {len(contents)} content slots"
        )

    display_date = format_display_date(generated_on or date.today())

    index = "\n".join(
        _render_index_entry(i, story) for i, story in enumerate(stories)
    )
    articles = "".join(
        _render_article(i, story, content)
        for i, (story, content) in enumerate(zip(stories, contents))
    )

    logger.debug(f"Rendered digest with {len(stories)} stories")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{DIGEST_NAME} – {display_date}</title>
<style>{DIGEST_CSS}</style>
<script>{ACTIVE_LINK_SCRIPT}</script>
</head>
<body>
<h1>{DIGEST_NAME}</h1>
<p class="date">{display_date}</p>
<div class="main-container">
<div class="sidebar">
<h2>Article Index</h2>
<ol class="story-index">
{index}
</ol>
</div>
<div class="articles">
{articles}</div>
</div>
</body>
</html>
"""
