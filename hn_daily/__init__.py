"""hn_daily - daily reading digest of the Hacker News front page."""

__version__ = "0.1.0"
