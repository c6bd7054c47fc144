"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from seo_analyzer.api import app

    uvicorn seo_analyzer.api:app --reload
"""

from seo_analyzer.api.app import app

__all__ = ["app"]
