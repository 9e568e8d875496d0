"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict
from reportlab.lib.pagesizes import A4, LETTER

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    default_base_name: str = "vectra-ai-export"
    pdf_page_size: str = "A4"
    pdf_author: str = "Vectra AI"
    image_fetch_timeout_seconds: float = 20.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_page_size(raw: str) -> tuple[float, float]:
    """Resolve a page size name (A4, LETTER) into points."""
    cleaned = raw.strip().upper()
    if cleaned not in _PAGE_SIZES:
        raise ValueError(f"Unknown page size: {raw!r}")
    return _PAGE_SIZES[cleaned]
