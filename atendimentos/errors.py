from __future__ import annotations


class AtendimentoError(Exception):
    """Base para os erros da aplicação."""

    status_code = 500


class ValidationError(AtendimentoError):
    """Dados de entrada inválidos: carrega uma mensagem por regra violada."""

    status_code = 400

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class BadRequestError(AtendimentoError):
    status_code = 400


class NotFoundError(AtendimentoError):
    status_code = 404


class StorageError(AtendimentoError):
    """Falha de conexão ou de consulta no banco."""

    status_code = 500
