"""
Application settings loaded from environment variables.

The ``Settings`` object is frozen: build it once at startup and hand it to
``main.create_app``, which passes the values each component needs into its
constructor.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: Optional[str] = None       # HMAC secret for session tokens (env: JWT_SECRET)
    jwt_algorithm: str = "HS256"
    jwt_expiry_seconds: int = 3600         # 1 hour
    password_hash_rounds: int = 12         # bcrypt work factor

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./gymapp.db"
    create_tables_on_startup: bool = True

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3001
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "frozen": True,
    }


def load_settings() -> Settings:
    """Read settings from the environment (and ``.env`` when present)."""
    return Settings()
