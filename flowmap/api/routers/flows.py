"""Flow extraction endpoint.

Routes
------
POST /api/extract-flows    Body: {"startUrl": "https://...", ...}    → map_site_flows
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from flowmap.exceptions import CrawlCancelled, CrawlError
from flowmap.pipeline import map_site_flows
from flowmap.scraper.models import Credentials

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class CredentialsBody(BaseModel):
    username: str
    password: str


class CrawlConfigBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_depth: Optional[int] = Field(default=None, ge=0, alias="maxDepth")
    max_pages: Optional[int] = Field(default=None, ge=1, alias="maxPages")
    # Milliseconds, as sent by browser clients.
    timeout: Optional[int] = Field(default=None, gt=0)


class ExtractFlowsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_url: HttpUrl = Field(alias="startUrl")
    credentials: Optional[CredentialsBody] = None
    crawl_config: Optional[CrawlConfigBody] = Field(default=None, alias="crawlConfig")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/extract-flows")
def extract_flows_endpoint(body: ExtractFlowsRequest) -> dict[str, Any]:
    """Crawl ``startUrl`` and return the ranked user flows.

    Runs synchronously in FastAPI's thread pool; each request gets its own
    crawl and graph snapshot.
    """
    config = body.crawl_config or CrawlConfigBody()
    credentials = (
        Credentials(username=body.credentials.username, password=body.credentials.password)
        if body.credentials
        else None
    )
    start_url = str(body.start_url)
    logger.info("[API] Starting flow extraction for %s", start_url)

    try:
        return map_site_flows(
            start_url,
            max_depth=config.max_depth,
            max_pages=config.max_pages,
            credentials=credentials,
            timeout=config.timeout / 1000 if config.timeout else None,
        )
    except CrawlCancelled as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except CrawlError as exc:
        raise HTTPException(
            status_code=502, detail=f"Failed to extract user flows: {exc}"
        ) from exc
