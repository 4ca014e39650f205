from __future__ import annotations

from datetime import date

import pytest

from atendimentos.db import Database
from atendimentos.errors import StorageError
from atendimentos.models import Atendimento

INSERT = (
    "INSERT INTO atendimento (nome, profissional, data, tipo, observacoes) "
    "VALUES (:nome, :profissional, :data, :tipo, :observacoes)"
)


def _row(**overrides) -> dict:
    row = {
        "nome": "Ana",
        "profissional": "Dr. X",
        "data": "2024-03-01",
        "tipo": "Pedagógico",
        "observacoes": "",
    }
    row.update(overrides)
    return row


def test_initialize_tables_is_idempotent(database: Database) -> None:
    database.initialize_tables()
    database.initialize_tables()
    assert database.query("SELECT COUNT(*) AS total FROM atendimento") == [{"total": 0}]


def test_query_with_parameters(database: Database) -> None:
    database.query(INSERT, _row())
    database.query(INSERT, _row(nome="Bia"))

    rows = database.query("SELECT nome FROM atendimento WHERE nome = :nome", {"nome": "Bia"})
    assert rows == [{"nome": "Bia"}]


def test_query_without_result_rows(database: Database) -> None:
    assert database.query(INSERT, _row()) == []


def test_tipo_check_constraint(database: Database) -> None:
    with pytest.raises(StorageError):
        database.query(INSERT, _row(tipo="Outro"))
    assert database.query("SELECT COUNT(*) AS total FROM atendimento")[0]["total"] == 0


def test_invalid_sql_raises_storage_error(database: Database) -> None:
    with pytest.raises(StorageError):
        database.query("SELECT * FROM tabela_inexistente")


def test_connections_return_to_pool_after_failures(database: Database) -> None:
    for _ in range(20):
        with pytest.raises(StorageError):
            database.query("SELECT * FROM tabela_inexistente")
    assert database.engine.pool.checkedout() == 0


def test_session_rolls_back_on_error(database: Database) -> None:
    with pytest.raises(RuntimeError):
        with database.session() as s:
            s.add(Atendimento(nome="Ana", profissional="Dr. X", data=date(2024, 1, 1), tipo="Psicológico"))
            s.flush()
            raise RuntimeError("falha")

    assert database.query("SELECT COUNT(*) AS total FROM atendimento")[0]["total"] == 0


def test_close_disposes_pool(tmp_path) -> None:
    db = Database(f"sqlite:///{tmp_path / 'close.sqlite'}")
    db.initialize_tables()
    db.close()
    # dispose não invalida o engine: novas conexões são abertas sob demanda
    assert db.query("SELECT COUNT(*) AS total FROM atendimento") == [{"total": 0}]
