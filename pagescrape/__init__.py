"""pagescrape: single-page structured content extraction."""

__version__ = "0.1.0"
