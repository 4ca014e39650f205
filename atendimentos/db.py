from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .errors import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base ORM para todos os modelos."""
    pass


class Database:
    """
    Pool de conexões com o banco relacional.

    Criado uma única vez no startup e injetado nos serviços;
    o pool limitado é o QueuePool do próprio engine.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 5, echo: bool = False) -> None:
        options: dict[str, Any] = {"echo": echo, "future": True}
        if make_url(url).get_backend_name() != "sqlite":
            options.update(pool_size=pool_size, max_overflow=max_overflow, pool_pre_ping=True)

        self.engine = create_engine(url, **options)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            future=True,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(settings.database_url, pool_size=settings.db_pool_size)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Context manager para a sessão ORM:
        - commit se tudo ok
        - rollback em exceções
        - close sempre (a conexão volta ao pool)
        """
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database query error: %s", e)
            raise StorageError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def query(self, sql: str, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Executa SQL parametrizado (:nome) numa conexão do pool e devolve as linhas."""
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql), params or {})
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            logger.error("Database query error: %s", e)
            raise StorageError(str(e)) from e

    def initialize_tables(self) -> None:
        """Cria as tabelas se não existirem (idempotente)."""
        # registra a tabela atendimento no metadata
        from . import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error("Error initializing database tables: %s", e)
            raise StorageError(str(e)) from e
        logger.info("Database tables initialized successfully")

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Conexão com o banco de dados encerrada")
