from __future__ import annotations

import json
from datetime import date

import pytest

from atendimentos.controller import (
    AtendimentoController,
    format_date_for_display,
    format_response,
    parse_id,
)
from atendimentos.errors import BadRequestError, StorageError
from atendimentos.schemas import AtendimentoIn


class FailingService:
    """Serviço que simula o banco fora do ar."""

    def __init__(self) -> None:
        self.calls = 0

    def _fail(self, *args, **kwargs):
        self.calls += 1
        raise StorageError("connection refused")

    find_all = find_by_id = create = update = delete = _fail


def _body(response) -> dict:
    return json.loads(response.body)


class TestHelpers:
    def test_format_date_for_display(self) -> None:
        assert format_date_for_display(date(2024, 3, 1)) == "01/03/2024"
        assert format_date_for_display("2024-12-25") == "25/12/2024"
        assert format_date_for_display(None) == ""

    def test_format_date_rejects_trailing_text(self) -> None:
        with pytest.raises(ValueError):
            format_date_for_display("2024-03-01xyz")

    def test_format_response_shape(self) -> None:
        envelope = format_response(True, {"id": 1}, "ok")
        assert set(envelope) == {"success", "data", "message", "errors", "timestamp"}
        assert envelope["errors"] == []
        assert envelope["timestamp"].endswith("Z")

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), (str(2**31 - 1), 2**31 - 1)])
    def test_parse_id(self, raw: str, expected: int) -> None:
        assert parse_id(raw) == expected

    @pytest.mark.parametrize(
        "raw", [None, "", "  ", "abc", "1.5", "12abc", "0", "-1", str(2**31), "99999999999999999999999"]
    )
    def test_parse_id_rejects(self, raw) -> None:
        with pytest.raises(BadRequestError):
            parse_id(raw)


class TestControllerErrors:
    def test_storage_failure_is_500(self) -> None:
        controller = AtendimentoController(FailingService())
        response = controller.get_all()
        body = _body(response)
        assert response.status_code == 500
        assert body["success"] is False
        assert body["message"] == "Error retrieving atendimentos"
        assert body["errors"] == ["connection refused"]

    @pytest.mark.parametrize(
        "call, message",
        [
            (lambda c: c.get_by_id("1"), "Error retrieving atendimento"),
            (lambda c: c.create(AtendimentoIn()), "Error creating atendimento"),
            (lambda c: c.update("1", AtendimentoIn()), "Error updating atendimento"),
            (lambda c: c.delete("1"), "Error deleting atendimento"),
        ],
    )
    def test_each_operation_maps_failure_to_500(self, call, message: str) -> None:
        response = call(AtendimentoController(FailingService()))
        assert response.status_code == 500
        assert _body(response)["message"] == message

    @pytest.mark.parametrize("method", ["get_by_id", "delete"])
    def test_bad_id_never_reaches_service(self, method: str) -> None:
        service = FailingService()
        response = getattr(AtendimentoController(service), method)("abc")
        assert response.status_code == 400
        assert _body(response)["errors"] == ["ID must be a valid number"]
        assert service.calls == 0

    def test_bad_id_on_update_never_reaches_service(self) -> None:
        service = FailingService()
        response = AtendimentoController(service).update("x1", AtendimentoIn())
        assert response.status_code == 400
        assert service.calls == 0
