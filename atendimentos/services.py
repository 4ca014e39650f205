from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping

from sqlalchemy import select

from .db import Database
from .errors import ValidationError
from .models import TIPOS_VALIDOS, Atendimento

logger = logging.getLogger(__name__)


# =========================
# Helper / DTO
# =========================
@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def _parse_date(value: Any) -> date | None:
    """Aceita date, datetime ou texto ISO (YYYY-MM-DD); None se não for interpretável."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _trim(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


# =========================
# Validação / sanitização (funções puras)
# =========================
def validate(data: Mapping[str, Any]) -> ValidationResult:
    """Verifica as regras dos campos; nunca lança exceção."""
    errors: list[str] = []

    if not _trim(data.get("nome")):
        errors.append("Nome é obrigatório")

    if not _trim(data.get("profissional")):
        errors.append("Profissional é obrigatório")

    data_atendimento = data.get("data")
    if data_atendimento is None or data_atendimento == "":
        errors.append("Data é obrigatória")
    elif _parse_date(data_atendimento) is None:
        errors.append("Data inválida")

    tipo = data.get("tipo")
    if not tipo or tipo not in TIPOS_VALIDOS:
        errors.append("Tipo deve ser: Psicológico, Pedagógico ou Assistência Social")

    return ValidationResult(is_valid=not errors, errors=errors)


def sanitize(data: Mapping[str, Any]) -> dict[str, Any]:
    """Remove espaços dos campos de texto; data e tipo passam inalterados."""
    return {
        "nome": _trim(data.get("nome")),
        "profissional": _trim(data.get("profissional")),
        "data": data.get("data"),
        "tipo": data.get("tipo"),
        "observacoes": _trim(data.get("observacoes")),
    }


def _clean_or_raise(data: Mapping[str, Any]) -> dict[str, Any]:
    clean = sanitize(data)
    result = validate(clean)
    if not result.is_valid:
        raise ValidationError(result.errors)
    clean["data"] = _parse_date(clean["data"])
    return clean


# =========================
# Persistência
# =========================
class AtendimentoService:
    """Operações CRUD sobre a tabela atendimento."""

    def __init__(self, database: Database) -> None:
        self.db = database

    def find_all(self) -> list[dict]:
        with self.db.session() as s:
            q = select(Atendimento).order_by(Atendimento.data.desc(), Atendimento.id.desc())
            return [a.to_dict() for a in s.scalars(q)]

    def find_by_id(self, atendimento_id: int) -> dict | None:
        with self.db.session() as s:
            a = s.get(Atendimento, atendimento_id)
            return a.to_dict() if a else None

    def create(self, data: Mapping[str, Any]) -> dict:
        clean = _clean_or_raise(data)

        with self.db.session() as s:
            a = Atendimento(**clean)
            s.add(a)
            s.flush()
            criado = a.to_dict()

        logger.info("Atendimento %s criado", criado["id"])
        return criado

    def update(self, atendimento_id: int, data: Mapping[str, Any]) -> dict | None:
        """Substitui o registro inteiro; None se o id não existir."""
        clean = _clean_or_raise(data)

        with self.db.session() as s:
            a = s.get(Atendimento, atendimento_id)
            if not a:
                return None

            for key, value in clean.items():
                setattr(a, key, value)
            s.flush()
            return a.to_dict()

    def delete(self, atendimento_id: int) -> dict | None:
        with self.db.session() as s:
            a = s.get(Atendimento, atendimento_id)
            if not a:
                return None

            removido = a.to_dict()
            s.delete(a)

        logger.info("Atendimento %s excluído", atendimento_id)
        return removido
