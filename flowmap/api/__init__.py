"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from flowmap.api import app

    uvicorn flowmap.api:app --reload
"""

from flowmap.api.app import app

__all__ = ["app"]
