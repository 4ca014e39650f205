from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .controller import AtendimentoController
from .schemas import AtendimentoIn, Envelope


def build_router(controller: AtendimentoController) -> APIRouter:
    """
    Rotas REST de atendimento.

    O mesmo router é montado em /atendimentos e /atendimento:
    - GET    ""       lista todos
    - GET    "/{id}"  busca por id
    - POST   ""       cria
    - PUT    "/{id}"  atualiza
    - DELETE "/{id}"  exclui
    """
    router = APIRouter(tags=["atendimentos"])

    @router.get("", response_model=Envelope)
    def listar_atendimentos() -> JSONResponse:
        return controller.get_all()

    # o id chega como texto: a conversão (e o 400) é do controller
    @router.get("/{atendimento_id}", response_model=Envelope)
    def buscar_atendimento(atendimento_id: str) -> JSONResponse:
        return controller.get_by_id(atendimento_id)

    @router.post("", response_model=Envelope, status_code=201)
    def criar_atendimento(payload: AtendimentoIn) -> JSONResponse:
        return controller.create(payload)

    @router.put("/{atendimento_id}", response_model=Envelope)
    def atualizar_atendimento(atendimento_id: str, payload: AtendimentoIn) -> JSONResponse:
        return controller.update(atendimento_id, payload)

    @router.delete("/{atendimento_id}", response_model=Envelope)
    def excluir_atendimento(atendimento_id: str) -> JSONResponse:
        return controller.delete(atendimento_id)

    return router
