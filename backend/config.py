"""Centralized configuration — all env vars in one place."""

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # OpenDota upstream
        self.opendota_base_url: str = os.getenv("OPENDOTA_BASE_URL", "https://api.opendota.com/api")
        self.opendota_api_key: str | None = os.getenv("OPENDOTA_API_KEY")
        self.upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "15"))

        # Cache policy. Game data changes a few times a year, so a day is plenty.
        self.cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", "86400"))
        self.cache_coalesce_misses: bool = _flag("CACHE_COALESCE_MISSES", "true")
        self.talent_header_fallback: bool = _flag("TALENT_HEADER_FALLBACK", "false")

        # Local record store
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./dotacodex.db")
        self.sync_api_key: str | None = os.getenv("SYNC_API_KEY")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing env vars for optional features (sync)."""
        required = ["SYNC_API_KEY"]
        return [var for var in required if not getattr(self, _attr_for(var))]


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    mapping = {
        "SYNC_API_KEY": "sync_api_key",
        "OPENDOTA_API_KEY": "opendota_api_key",
    }
    return mapping.get(env_var, env_var.lower())
