from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from atendimentos.api_main import create_app
from atendimentos.config import Settings
from atendimentos.db import Database
from atendimentos.services import AtendimentoService


@pytest.fixture
def database(tmp_path) -> Iterator[Database]:
    db = Database(f"sqlite:///{tmp_path / 'atendimentos.sqlite'}")
    db.initialize_tables()
    yield db
    db.close()


@pytest.fixture
def service(database: Database) -> AtendimentoService:
    return AtendimentoService(database)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url_override="sqlite://", log_level="WARNING")


@pytest.fixture
def client(settings: Settings, database: Database) -> Iterator[TestClient]:
    with TestClient(create_app(settings, database)) as c:
        yield c


@pytest.fixture
def payload() -> dict:
    return {
        "nome": "Ana",
        "profissional": "Dr. X",
        "data": "2024-03-01",
        "tipo": "Psicológico",
    }
