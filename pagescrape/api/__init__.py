"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from pagescrape.api import app

    uvicorn pagescrape.api:app --reload
"""

from pagescrape.api.app import app

__all__ = ["app"]
