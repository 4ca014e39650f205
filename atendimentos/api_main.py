from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .controller import AtendimentoController, envelope_response, utc_timestamp
from .db import Database
from .routes import build_router
from .schemas import HealthOut
from .services import AtendimentoService

logger = logging.getLogger(__name__)

SERVICE_NAME = "Sistema de Atendimento Psicossocial"
INDEX_HTML = Path(__file__).resolve().parent / "static" / "index.html"


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        campo = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{campo}: {err.get('msg')}" if campo else str(err.get("msg")))
    return messages


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Monta a aplicação:
    - pool de conexões criado uma vez e injetado em serviço/controller
    - rotas montadas em /atendimentos e /atendimento
    - handlers de erro que respondem sempre com o envelope
    """
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    database = database or Database.from_settings(settings)
    controller = AtendimentoController(AtendimentoService(database))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Startup: cria a tabela (idempotente)
        database.initialize_tables()
        logger.info("Banco de dados inicializado com sucesso")
        yield
        # Shutdown: esvazia o pool
        database.close()

    app = FastAPI(title="Atendimento Psicossocial API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def request_logger(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    # Rotas

    @app.get("/health", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(status="OK", timestamp=utc_timestamp(), service=SERVICE_NAME)

    @app.get("/", include_in_schema=False)
    def index() -> FileResponse:
        return FileResponse(INDEX_HTML, media_type="text/html")

    router = build_router(controller)
    app.include_router(router, prefix="/atendimentos")
    app.include_router(router, prefix="/atendimento")

    # Tratamento de erros centralizado

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return envelope_response(
            status.HTTP_400_BAD_REQUEST, False, None, "Validation error", _validation_messages(exc)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return envelope_response(exc.status_code, False, None, "Rota não encontrada")
        return envelope_response(exc.status_code, False, None, str(exc.detail), [str(exc.detail)])

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Handler global de erro")
        return envelope_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            False,
            None,
            str(exc) or "Erro interno do servidor",
            [str(exc) or "Algo deu errado"],
        )

    return app
