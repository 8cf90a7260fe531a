"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from datemapz.core.schemas import PlanningMode


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials and tunables."""

    google_maps_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    llm_provider: str = "google"
    llm_model: Optional[str] = None
    llm_temperature: float = 0.7
    llm_timeout_s: float = 60.0
    output_style: str = "tools"

    http_timeout_s: float = 8.0
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "DateMapz/1.0"

    min_candidates: int = 3
    min_stops: Dict[PlanningMode, int] = field(
        default_factory=lambda: {
            PlanningMode.CURATED: 2,
            PlanningMode.DISCOVER: 2,
            PlanningMode.SIMPLE: 1,
        }
    )

    cors_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"]
    )
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables (``.env`` is read by the app)."""

        origins = os.getenv("CORS_ORIGINS")
        settings = cls(
            google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            llm_provider=os.getenv("DATEMAPZ_LLM_PROVIDER", "google").lower(),
            llm_model=os.getenv("DATEMAPZ_LLM_MODEL") or None,
            llm_temperature=_env_float("DATEMAPZ_LLM_TEMPERATURE", 0.7),
            llm_timeout_s=_env_float("DATEMAPZ_LLM_TIMEOUT", 60.0),
            output_style=os.getenv("DATEMAPZ_OUTPUT_STYLE", "tools").lower(),
            http_timeout_s=_env_float("DATEMAPZ_HTTP_TIMEOUT", 8.0),
            nominatim_url=os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org"),
            nominatim_user_agent=os.getenv("NOMINATIM_USER_AGENT", "DateMapz/1.0"),
            min_candidates=_env_int("DATEMAPZ_MIN_CANDIDATES", 3),
            min_stops={
                PlanningMode.CURATED: _env_int("DATEMAPZ_MIN_STOPS_CURATED", 2),
                PlanningMode.DISCOVER: _env_int("DATEMAPZ_MIN_STOPS_DISCOVER", 2),
                PlanningMode.SIMPLE: _env_int("DATEMAPZ_MIN_STOPS_SIMPLE", 1),
            },
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
        )
        if origins:
            settings.cors_origins = [origin.strip() for origin in origins.split(",") if origin.strip()]
        return settings

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    @property
    def places_configured(self) -> bool:
        return bool(self.google_maps_api_key)
