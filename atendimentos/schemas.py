from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# Schemas de entrada

class AtendimentoIn(BaseModel):
    # campos opcionais e data como texto: as regras (e mensagens) ficam em services.validate
    nome: str | None = None
    profissional: str | None = None
    data: str | None = None
    tipo: str | None = None
    observacoes: str | None = None


# Schemas de saída

class AtendimentoOut(BaseModel):
    id: int
    nome: str
    profissional: str
    data: str  # DD/MM/AAAA
    tipo: str
    observacoes: str | None = None


class DeletedOut(BaseModel):
    id: int


class Envelope(BaseModel):
    success: bool
    data: Any = None
    message: str = ""
    errors: list[str] = Field(default_factory=list)
    timestamp: str


class HealthOut(BaseModel):
    status: str = "OK"
    timestamp: str
    service: str
