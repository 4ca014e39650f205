from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from .errors import BadRequestError, ValidationError
from .schemas import AtendimentoIn, AtendimentoOut, DeletedOut, Envelope
from .services import AtendimentoService

logger = logging.getLogger(__name__)

MAX_ID = 2**31 - 1


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_response(success: bool, data: Any = None, message: str = "", errors: list[str] | None = None) -> dict:
    return Envelope(
        success=success,
        data=data,
        message=message,
        errors=list(errors or []),
        timestamp=utc_timestamp(),
    ).model_dump()


def envelope_response(
    status_code: int, success: bool, data: Any = None, message: str = "", errors: list[str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=format_response(success, data, message, errors))


def format_date_for_display(value: date | str | None) -> str:
    """Data no formato de exibição pt-BR (DD/MM/AAAA)."""
    if not value:
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value.strip())
    return value.strftime("%d/%m/%Y")


def format_atendimento(atendimento: dict | None) -> dict | None:
    if not atendimento:
        return None
    out = dict(atendimento, data=format_date_for_display(atendimento.get("data")))
    return AtendimentoOut(**out).model_dump()


def parse_id(raw: str | None) -> int:
    if raw is None or not str(raw).strip():
        raise BadRequestError("ID must be a valid number")
    try:
        atendimento_id = int(str(raw).strip())
    except ValueError:
        raise BadRequestError("ID must be a valid number") from None
    # limites da coluna INTEGER
    if not 1 <= atendimento_id <= MAX_ID:
        raise BadRequestError("ID must be a valid number")
    return atendimento_id


def _invalid_id() -> JSONResponse:
    return envelope_response(
        status.HTTP_400_BAD_REQUEST, False, None, "Invalid ID parameter", ["ID must be a valid number"]
    )


def _not_found() -> JSONResponse:
    return envelope_response(status.HTTP_404_NOT_FOUND, False, None, "Atendimento not found")


def _validation_failed(e: ValidationError) -> JSONResponse:
    return envelope_response(status.HTTP_400_BAD_REQUEST, False, None, "Validation error", e.errors)


def _server_error(message: str, e: Exception) -> JSONResponse:
    return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, False, None, message, [str(e)])


class AtendimentoController:
    """Traduz as requisições HTTP em chamadas ao serviço e devolve sempre o envelope."""

    def __init__(self, service: AtendimentoService) -> None:
        self.service = service

    def get_all(self) -> JSONResponse:
        try:
            atendimentos = self.service.find_all()
        except Exception as e:
            logger.error("Error in get_all: %s", e)
            return _server_error("Error retrieving atendimentos", e)

        return envelope_response(
            status.HTTP_200_OK,
            True,
            [format_atendimento(a) for a in atendimentos],
            "Atendimentos retrieved successfully",
        )

    def get_by_id(self, raw_id: str | None) -> JSONResponse:
        try:
            atendimento_id = parse_id(raw_id)
        except BadRequestError:
            return _invalid_id()

        try:
            atendimento = self.service.find_by_id(atendimento_id)
        except Exception as e:
            logger.error("Error in get_by_id: %s", e)
            return _server_error("Error retrieving atendimento", e)

        if not atendimento:
            return _not_found()
        return envelope_response(
            status.HTTP_200_OK, True, format_atendimento(atendimento), "Atendimento retrieved successfully"
        )

    def create(self, payload: AtendimentoIn) -> JSONResponse:
        try:
            atendimento = self.service.create(payload.model_dump())
        except ValidationError as e:
            return _validation_failed(e)
        except Exception as e:
            logger.error("Error in create: %s", e)
            return _server_error("Error creating atendimento", e)

        return envelope_response(
            status.HTTP_201_CREATED, True, format_atendimento(atendimento), "Atendimento created successfully"
        )

    def update(self, raw_id: str | None, payload: AtendimentoIn) -> JSONResponse:
        try:
            atendimento_id = parse_id(raw_id)
        except BadRequestError:
            return _invalid_id()

        try:
            atendimento = self.service.update(atendimento_id, payload.model_dump())
        except ValidationError as e:
            return _validation_failed(e)
        except Exception as e:
            logger.error("Error in update: %s", e)
            return _server_error("Error updating atendimento", e)

        if not atendimento:
            return _not_found()
        return envelope_response(
            status.HTTP_200_OK, True, format_atendimento(atendimento), "Atendimento updated successfully"
        )

    def delete(self, raw_id: str | None) -> JSONResponse:
        try:
            atendimento_id = parse_id(raw_id)
        except BadRequestError:
            return _invalid_id()

        try:
            removido = self.service.delete(atendimento_id)
        except Exception as e:
            logger.error("Error in delete: %s", e)
            return _server_error("Error deleting atendimento", e)

        if not removido:
            return _not_found()
        return envelope_response(
            status.HTTP_200_OK,
            True,
            DeletedOut(id=removido["id"]).model_dump(),
            "Atendimento deleted successfully",
        )
