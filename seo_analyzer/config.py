"""Centralised settings for the SEO analyzer service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Primary page fetch
    # ------------------------------------------------------------------
    page_fetch_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_FETCH_TIMEOUT", "15.0"))
    )

    # ------------------------------------------------------------------
    # Link verification
    # ------------------------------------------------------------------
    link_check_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LINK_CHECK_TIMEOUT", "10.0"))
    )
    link_check_max_bytes: int = field(
        default_factory=lambda: int(os.environ.get("LINK_CHECK_MAX_BYTES", "2000"))
    )
    link_check_max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("LINK_CHECK_MAX_REDIRECTS", "5"))
    )
    link_check_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("LINK_CHECK_CONCURRENCY", "10"))
    )

    # ------------------------------------------------------------------
    # Keyword suggestions (Gemini)
    # ------------------------------------------------------------------
    gemini_api_key: str = field(
        default_factory=lambda: os.environ.get("GEMINI_API_KEY", "")
    )
    gemini_model: str = field(
        default_factory=lambda: os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
    )
    gemini_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        )
    )
    gemini_timeout: float = field(
        default_factory=lambda: float(os.environ.get("GEMINI_TIMEOUT", "30.0"))
    )
    keyword_content_char_limit: int = field(
        default_factory=lambda: int(os.environ.get("KEYWORD_CONTENT_CHAR_LIMIT", "6000"))
    )
    keyword_min_content_chars: int = field(
        default_factory=lambda: int(os.environ.get("KEYWORD_MIN_CONTENT_CHARS", "50"))
    )

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "3001"))
    )


# Module-level singleton; import this everywhere:
#   from seo_analyzer.config import settings
settings = Settings()
