"""Fixed-width plain-text rendition of the HTML digest."""

import textwrap

from bs4 import BeautifulSoup
from bs4.element import NavigableString


TEXT_WIDTH = 80
MIN_WIDTH = 10

DROPPED_TAGS = ["head", "script", "style", "noscript", "template"]

BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "li", "main", "nav", "ol", "p", "pre", "section", "table",
    "tr", "ul",
]

HEADING_LEVELS = {f"h{level}": level for level in range(1, 7)}

PRE_TAB_SIZE = 4

# Private-use markers: one tags list item paragraphs until wrapping, the
# other stands in for a preformatted block until output
_ITEM_MARK = "\ue000"
_PRE_MARK = "\ue001"


def _wrap_paragraph(paragraph: str, width: int) -> list[str]:
    if paragraph.startswith(_ITEM_MARK):
        return textwrap.wrap(
            paragraph[len(_ITEM_MARK):].strip(),
            width=width,
            initial_indent="* ",
            subsequent_indent="  ",
            break_on_hyphens=False,
        )
    return textwrap.wrap(paragraph, width=width, break_on_hyphens=False)


def _preformatted_lines(text: str, width: int) -> list[str]:
    """Keep the line structure and indentation of a <pre> block.

    Lines are never re-flowed; a line longer than `width` is cut into
    `width`-sized pieces.
    """
    lines: list[str] = []
    for line in text.expandtabs(PRE_TAB_SIZE).strip("\n").split("\n"):
        line = line.rstrip()
        if not line:
            lines.append("")
            continue
        lines.extend(line[start:start + width] for start in range(0, len(line), width))
    return lines


def html_to_text(html: str, width: int = TEXT_WIDTH) -> str:
    """Reduce an HTML document to plain text wrapped at `width` columns.

    Every block element starts a new paragraph. Headings are prefixed with
    ``#`` marks, list items with ``* ``, and ``<hr>`` becomes a rule of
    dashes. ``<pre>`` blocks keep their lines and indentation. The output is
    a deterministic function of `html` and `width`, and no line is longer
    than `width`.

    Args:
        html: HTML markup to convert
        width: Maximum line length

    Returns:
        The wrapped text, paragraphs separated by blank lines

    Raises:
        ValueError: If width is less than MIN_WIDTH

    Example:
        >>> html_to_text("<h2>Title</h2><p>Some   body text.</p>")
        '## Title\\n\\nSome body text.\\n'
    """
    if width < MIN_WIDTH:
        raise ValueError(f"width must be at least {MIN_WIDTH}, got {width}")

    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()

    for rule in soup.find_all("hr"):
        rule.replace_with(NavigableString(f"\n{'-' * width}\n"))

    for line_break in soup.find_all("br"):
        line_break.replace_with(NavigableString("\n"))

    preformatted: dict[str, str] = {}
    for block in soup.find_all("pre"):
        # Nested <pre> blocks were already taken with their parent
        if block.find_parent("pre") is not None:
            continue
        key = f"{_PRE_MARK}{len(preformatted)}"
        preformatted[key] = block.get_text()
        block.replace_with(NavigableString(f"\n{key}\n"))

    for name, level in HEADING_LEVELS.items():
        for heading in soup.find_all(name):
            heading.insert(0, NavigableString(f"{'#' * level} "))

    for item in soup.find_all("li"):
        item.insert(0, NavigableString(_ITEM_MARK))

    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before(NavigableString("\n"))
        block.insert_after(NavigableString("\n"))

    paragraphs = [
        " ".join(line.split())
        for line in soup.get_text().split("\n")
    ]

    lines: list[str] = []
    pending_item = False
    for paragraph in paragraphs:
        if not paragraph:
            continue
        if paragraph == _ITEM_MARK:
            # The item's text sits in a nested block on a later line
            pending_item = True
            continue

        if paragraph in preformatted:
            wrapped = _preformatted_lines(preformatted[paragraph], width)
            pending_item = False
        else:
            if pending_item and not paragraph.startswith(_ITEM_MARK):
                paragraph = _ITEM_MARK + paragraph
            pending_item = False
            wrapped = _wrap_paragraph(paragraph, width)

        if not any(wrapped):
            continue
        if lines:
            lines.append("")
        lines.extend(wrapped)

    return "\n".join(lines) + "\n" if lines else ""
