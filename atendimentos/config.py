from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from sqlalchemy.engine import URL


@dataclass(frozen=True)
class Settings:
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "atendimentos"
    db_user: str = "postgres"
    db_password: str = ""
    # se definido, tem precedência sobre DB_* (ex: sqlite:///atendimentos.sqlite em dev)
    database_url_override: str | None = None
    db_pool_size: int = 5

    host: str = "127.0.0.1"
    port: int = 3000
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )
    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def load_settings() -> Settings:
    """Lê as variáveis de ambiente uma única vez (startup)."""
    load_dotenv()
    defaults = Settings()

    return Settings(
        db_host=os.getenv("DB_HOST", defaults.db_host),
        db_port=int(os.getenv("DB_PORT", str(defaults.db_port))),
        db_name=os.getenv("DB_NAME", defaults.db_name),
        db_user=os.getenv("DB_USER", defaults.db_user),
        db_password=os.getenv("DB_PASSWORD", defaults.db_password),
        database_url_override=os.getenv("DATABASE_URL") or None,
        db_pool_size=int(os.getenv("DB_POOL_SIZE", str(defaults.db_pool_size))),
        host=os.getenv("HOST", defaults.host),
        port=int(os.getenv("PORT", str(defaults.port))),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", ",".join(defaults.cors_origins))),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )
