"""Centralised settings for the flowmap service layers.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The extraction core (``flowmap.graph``, ``flowmap.detectors``,
``flowmap.noise``, ``flowmap.scoring``, ``flowmap.engine``) never reads these
settings; only the crawler, pipeline, API and CLI do.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Crawl limits
    # ------------------------------------------------------------------
    max_depth: int = field(
        default_factory=lambda: int(os.environ.get("FLOWMAP_MAX_DEPTH", "3"))
    )
    max_pages: int = field(
        default_factory=lambda: int(os.environ.get("FLOWMAP_MAX_PAGES", "50"))
    )

    # ------------------------------------------------------------------
    # HTTP fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    rate_limit_delay: float = field(
        default_factory=lambda: float(os.environ.get("RATE_LIMIT_DELAY", "0.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "FLOWMAP_USER_AGENT", "Mozilla/5.0 (compatible; FlowMapperBot/1.0)"
        )
    )
    render_js: bool = field(default_factory=lambda: _env_bool("FLOWMAP_RENDER_JS"))

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------
    global_nav_threshold: float = field(
        default_factory=lambda: float(os.environ.get("GLOBAL_NAV_THRESHOLD", "0.6"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("FLOWMAP_LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton — import this in the service layers:
#   from flowmap.config import settings
settings = Settings()
