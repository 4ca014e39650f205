from __future__ import annotations

import pytest

from atendimentos import cli
from atendimentos.config import Settings


@pytest.fixture
def sqlite_settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    settings = Settings(database_url_override=f"sqlite:///{tmp_path / 'cli.sqlite'}", log_level="WARNING")
    monkeypatch.setattr(cli, "load_settings", lambda: settings)
    return settings


def test_add_list_delete(sqlite_settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["add", "--nome", "Ana", "--profissional", "Dr. X", "--data", "2024-03-01", "--tipo", "Psicológico"])
    assert "Atendimento criado: 1" in capsys.readouterr().out

    cli.main(["list"])
    assert "1 | 01/03/2024 | Psicológico | Ana | Dr. X" in capsys.readouterr().out

    cli.main(["db-info"])
    assert "ATENDIMENTOS: 1" in capsys.readouterr().out

    cli.main(["delete", "--id", "1"])
    assert "Excluído." in capsys.readouterr().out

    cli.main(["list"])
    assert "Nenhum atendimento cadastrado." in capsys.readouterr().out


def test_add_invalid_prints_messages(sqlite_settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["add", "--nome", " ", "--profissional", "Dr. X", "--data", "2024-03-01", "--tipo", "Pedagógico"])
    assert exc_info.value.code == 2
    assert "- Nome é obrigatório" in capsys.readouterr().out


def test_delete_absent(sqlite_settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["delete", "--id", "99"])
    assert exc_info.value.code == 1
    assert "Atendimento 99 não encontrado." in capsys.readouterr().out
