from __future__ import annotations

import enum
from datetime import date

from sqlalchemy import CheckConstraint, Date, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class TipoAtendimento(enum.Enum):
    PSICOLOGICO = "Psicológico"
    PEDAGOGICO = "Pedagógico"
    ASSISTENCIA_SOCIAL = "Assistência Social"


TIPOS_VALIDOS: tuple[str, ...] = tuple(t.value for t in TipoAtendimento)


class Atendimento(Base):
    __tablename__ = "atendimento"
    __table_args__ = (
        CheckConstraint(
            "tipo IN ({})".format(", ".join(f"'{t}'" for t in TIPOS_VALIDOS)),
            name="ck_atendimento_tipo",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(Text, nullable=False)
    profissional: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[date] = mapped_column(Date, nullable=False)
    tipo: Mapped[str] = mapped_column(Text, nullable=False)
    observacoes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.nome,
            "profissional": self.profissional,
            "data": self.data,
            "tipo": self.tipo,
            "observacoes": self.observacoes,
        }

    def __repr__(self) -> str:
        return f"Atendimento({self.id}, {self.nome}, {self.tipo}, {self.data})"
