import os
from pathlib import Path
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Tuple

from dotenv import load_dotenv

from teamgen.colors import DEFAULT_PALETTE, validate_palette
from teamgen.validator import DEFAULT_MAX_ROSTER_SIZE, DEFAULT_MAX_TEAMS

# Prefer the backend/.env file so running from the repo root still picks up settings.
# __file__ is backend/app/core/config.py -> parents[2] is backend/
BACKEND_ENV = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(BACKEND_ENV)


def _env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean from the environment with sensible defaults."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: List[str] | None = None) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default or []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _cors_origins() -> List[str]:
    """Local dev frontends plus any CORS_ORIGINS override, deduplicated in order."""
    base_dev = ["http://localhost:5173", "http://127.0.0.1:5173"]
    merged = _env_list("CORS_ORIGINS", []) + base_dev

    seen = set()
    deduped = []
    for origin in merged:
        if origin in seen:
            continue
        seen.add(origin)
        deduped.append(origin)
    return deduped


def _jersey_palette() -> Tuple[str, ...]:
    raw = os.getenv("JERSEY_COLORS")
    if raw is None:
        return DEFAULT_PALETTE
    # Blank entries are kept so validation can reject them.
    return tuple(item.strip() for item in raw.split(","))


@dataclass
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Team Generator API"))
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///teamgen_dev.db"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", False))
    cors_origins: List[str] = field(default_factory=_cors_origins)
    max_roster_size: int = field(default_factory=lambda: _env_int("MAX_ROSTER_SIZE", DEFAULT_MAX_ROSTER_SIZE))
    max_teams: int = field(default_factory=lambda: _env_int("MAX_TEAMS", DEFAULT_MAX_TEAMS))
    jersey_colors: Tuple[str, ...] = field(default_factory=_jersey_palette)
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console"))

    def validate(self) -> "Settings":
        """Fail fast on configuration the generator cannot run with."""
        self.jersey_colors = validate_palette(self.jersey_colors)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance sourced from environment variables."""
    return Settings()
