"""
Application configuration using pydantic-settings.
All settings read from environment variables with sensible defaults.
"""

import os
import tempfile
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the receipt engine."""

    # ── Application ──────────────────────────────────────────
    APP_NAME: str = "receipt-engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    BRAND_NAME: str = "ZeusODX"

    # ── Storage ──────────────────────────────────────────────
    ARTIFACT_ROOT: str = os.path.join(tempfile.gettempdir(), "receipt-artifacts")

    # ── Display metadata ─────────────────────────────────────
    # Currency codes rendered as whole fiat amounts, mapped to their glyph
    FIAT_CURRENCY_GLYPHS: dict[str, str] = {
        "NGN": "₦",
        "NGNB": "₦",
        "NGNZ": "₦",
        "₦": "₦",
    }
    PLACEHOLDER: str = "—"
    MASK_LEAD: int = 6
    MASK_TAIL: int = 4
    MAX_FRACTION_DIGITS: int = 8

    # ── Export / Share ───────────────────────────────────────
    # Letter size, in points
    PDF_PAGE_WIDTH: int = 612
    PDF_PAGE_HEIGHT: int = 792
    SHARE_DIALOG_TITLE: str = "Share Transaction Receipt"
    SHARE_MIME_TYPE: str = "application/pdf"
    SHARE_UTI: str = "com.adobe.pdf"

    # ── Observability ────────────────────────────────────────
    SENTRY_DSN: Optional[str] = None
    PROMETHEUS_ENABLED: bool = True

    # ── Security ─────────────────────────────────────────────
    API_KEY: Optional[str] = None
    CORS_ORIGINS: str = "*"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def fiat_codes(self) -> frozenset[str]:
        return frozenset(code.upper() for code in self.FIAT_CURRENCY_GLYPHS)


# Singleton instance
settings = Settings()
