from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None or val.strip() == "":
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val.strip()


def _parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw or raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    github_client_id: str = ""
    github_secret: str = ""
    github_api_url: str = "https://api.github.com"
    github_timeout: float = 10.0
    database_url: str = "sqlite:///./profile_service.db"
    cors_origins: tuple[str, ...] = ("*",)
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read settings once at process start.
        Only JWT_SECRET is required; everything else has a default.
        """
        load_dotenv()
        return cls(
            jwt_secret=_get_env("JWT_SECRET"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256").strip() or "HS256",
            github_client_id=os.getenv("GITHUB_CLIENT_ID", "").strip(),
            github_secret=os.getenv("GITHUB_SECRET", "").strip(),
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").strip().rstrip("/"),
            github_timeout=float(os.getenv("GITHUB_TIMEOUT", "10.0")),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./profile_service.db").strip(),
            cors_origins=tuple(_parse_origins(os.getenv("CORS_ORIGINS", "*"))),
            port=int(os.getenv("PORT", "8000")),
        )
