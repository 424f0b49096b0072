"""Configuration settings for the hn_daily digest pipeline."""

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv


# Hacker News listing endpoints
DEFAULT_TOP_STORIES_URL = "https://hacker-news.firebaseio.com/v0/topstories.json"
DEFAULT_ITEM_URL_TEMPLATE = "https://hacker-news.firebaseio.com/v0/item/{id}.json"

# User agents: the listing API gets an honest one, article sites get a browser one
DEFAULT_LISTING_USER_AGENT = "hn_daily/0.1"
DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/112.0.0.0 Safari/537.36"
)

DEFAULT_OUTPUT_DIR = "~/hn_daily"

# Must match the values of engines.text_normalizer.NormalizationPolicy
NORMALIZATION_POLICIES = ("collapse", "soft_break")


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass(frozen=True)
class Settings:
    """Configuration settings for the digest pipeline.

    Settings are immutable once loaded; use ``dataclasses.replace`` to derive
    a variant (for example when applying command line overrides).

    Attributes:
        top_stories_url: Endpoint returning the ordered list of top story ids
        item_url_template: Item endpoint, with ``{id}`` replaced by the story id
        story_limit: Number of top stories to include in the digest
        listing_timeout_seconds: Timeout for each listing API request
        content_timeout_seconds: Timeout for each article page request
        listing_user_agent: User-Agent sent to the listing API
        browser_user_agent: Browser-like User-Agent sent to article sites
        output_dir: Directory receiving the dated digest files
        text_width: Column width of the plain-text digest
        normalization_policy: Plain-text policy ("collapse" or "soft_break")
        soft_break_threshold: Token length after which "soft_break" breaks the line
        pdf_enabled: Whether to attempt the optional PDF export
        pdf_command: Name of the HTML-to-PDF converter executable
        write_run_log: Whether to write a JSON run log next to the digest
    """

    top_stories_url: str = DEFAULT_TOP_STORIES_URL
    item_url_template: str = DEFAULT_ITEM_URL_TEMPLATE
    story_limit: int = 30
    listing_timeout_seconds: float = 10.0
    content_timeout_seconds: float = 10.0
    listing_user_agent: str = DEFAULT_LISTING_USER_AGENT
    browser_user_agent: str = DEFAULT_BROWSER_USER_AGENT
    output_dir: str = DEFAULT_OUTPUT_DIR
    text_width: int = 80
    normalization_policy: str = "collapse"
    soft_break_threshold: int = 30
    pdf_enabled: bool = True
    pdf_command: str = "wkhtmltopdf"
    write_run_log: bool = False

    @property
    def output_path(self) -> Path:
        """Return the output directory with ``~`` expanded."""
        return Path(self.output_dir).expanduser()

    def item_url(self, story_id: int) -> str:
        """Return the item endpoint URL for a story id."""
        return self.item_url_template.format(id=story_id)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid.
        """
        errors: list[str] = []

        if not self.top_stories_url:
            errors.append("top_stories_url must not be empty")

        if "{id}" not in self.item_url_template:
            errors.append("item_url_template must contain an {id} placeholder")

        if self.story_limit < 1:
            errors.append("story_limit must be at least 1")

        if self.listing_timeout_seconds <= 0.0:
            errors.append("listing_timeout_seconds must be positive")

        if self.content_timeout_seconds <= 0.0:
            errors.append("content_timeout_seconds must be positive")

        if self.text_width < 20:
            errors.append("text_width must be at least 20")

        if self.normalization_policy not in NORMALIZATION_POLICIES:
            errors.append(
                f"normalization_policy must be one of {', '.join(NORMALIZATION_POLICIES)}, "
                f"got {self.normalization_policy!r}"
            )

        if self.soft_break_threshold < 1:
            errors.append("soft_break_threshold must be at least 1")

        if not self.pdf_command:
            errors.append("pdf_command must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))


def _parse_float(value: str | None, default: float) -> float:
    """Parse a string to float, returning default if None or invalid."""
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_int(value: str | None, default: int) -> int:
    """Parse a string to int, returning default if None or invalid."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_bool(value: str | None, default: bool) -> bool:
    """Parse a string flag ("1", "true", "yes", "on" and their negations)."""
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return default


def load_settings(env_path: str | Path | None = None, validate: bool = True) -> Settings:
    """Load settings from environment variables and .env file.

    Args:
        env_path: Optional path to .env file. If None, searches for .env
                  in current directory and parent directories.
        validate: If True, validate settings after loading.

    Returns:
        Settings instance with loaded configuration.

    Raises:
        ConfigurationError: If validate=True and configuration is invalid.
    """
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv()

    settings = Settings(
        top_stories_url=os.getenv("TOP_STORIES_URL", DEFAULT_TOP_STORIES_URL),
        item_url_template=os.getenv("ITEM_URL_TEMPLATE", DEFAULT_ITEM_URL_TEMPLATE),
        story_limit=_parse_int(os.getenv("STORY_LIMIT"), 30),
        listing_timeout_seconds=_parse_float(
            os.getenv("LISTING_TIMEOUT_SECONDS"), 10.0
        ),
        content_timeout_seconds=_parse_float(
            os.getenv("CONTENT_TIMEOUT_SECONDS"), 10.0
        ),
        listing_user_agent=os.getenv("LISTING_USER_AGENT", DEFAULT_LISTING_USER_AGENT),
        browser_user_agent=os.getenv("BROWSER_USER_AGENT", DEFAULT_BROWSER_USER_AGENT),
        output_dir=os.getenv("OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
        text_width=_parse_int(os.getenv("TEXT_WIDTH"), 80),
        normalization_policy=os.getenv("NORMALIZATION_POLICY", "collapse").strip().lower(),
        soft_break_threshold=_parse_int(os.getenv("SOFT_BREAK_THRESHOLD"), 30),
        pdf_enabled=_parse_bool(os.getenv("PDF_ENABLED"), True),
        pdf_command=os.getenv("PDF_COMMAND", "wkhtmltopdf"),
        write_run_log=_parse_bool(os.getenv("WRITE_RUN_LOG"), False),
    )

    if validate:
        settings.validate()

    return settings
