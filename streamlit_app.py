from __future__ import annotations

import os
from datetime import date, datetime

import requests
import streamlit as st

st.set_page_config(page_title="Atendimento Psicossocial", layout="wide")

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:3000")

TIPOS = ["Psicológico", "Pedagógico", "Assistência Social"]


# HTTP client (envelope {success, data, message, errors, timestamp})

class ApiError(Exception):
    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


def _envelope(r: requests.Response) -> dict:
    try:
        body = r.json()
    except ValueError:
        r.raise_for_status()
        raise ApiError(f"Resposta inválida da API (HTTP {r.status_code}).")

    if not body.get("success"):
        raise ApiError(body.get("message") or f"HTTP {r.status_code}", body.get("errors"))
    return body


def api_get(path: str) -> dict:
    return _envelope(requests.get(f"{API_BASE}{path}", timeout=10))


def api_post(path: str, payload: dict) -> dict:
    return _envelope(requests.post(f"{API_BASE}{path}", json=payload, timeout=10))


def api_put(path: str, payload: dict) -> dict:
    return _envelope(requests.put(f"{API_BASE}{path}", json=payload, timeout=10))


def api_delete(path: str) -> dict:
    return _envelope(requests.delete(f"{API_BASE}{path}", timeout=10))


def show_error(e: Exception) -> None:
    st.error(str(e))
    for msg in getattr(e, "errors", []):
        st.write(f"- {msg}")


def display_to_date(value: str) -> date:
    return datetime.strptime(value, "%d/%m/%Y").date()


def form_payload(prefix: str, atual: dict | None = None) -> dict:
    atual = atual or {}
    c1, c2 = st.columns(2)
    nome = c1.text_input("Nome", value=atual.get("nome", ""), key=f"{prefix}_nome")
    profissional = c2.text_input("Profissional", value=atual.get("profissional", ""), key=f"{prefix}_prof")

    c3, c4 = st.columns(2)
    data_at = c3.date_input(
        "Data",
        value=display_to_date(atual["data"]) if atual.get("data") else date.today(),
        key=f"{prefix}_data",
    )
    tipo = c4.selectbox(
        "Tipo",
        options=TIPOS,
        index=TIPOS.index(atual["tipo"]) if atual.get("tipo") in TIPOS else 0,
        key=f"{prefix}_tipo",
    )
    observacoes = st.text_area(
        "Observações (opcional)", value=atual.get("observacoes") or "", height=100, key=f"{prefix}_obs"
    )

    return {
        "nome": nome.strip(),
        "profissional": profissional.strip(),
        "data": data_at.isoformat(),
        "tipo": tipo,
        "observacoes": observacoes.strip(),
    }


with st.sidebar:
    st.header("API")
    st.caption(f"API: {API_BASE}")
    try:
        health = requests.get(f"{API_BASE}/health", timeout=5).json()
        st.success(f"{health.get('service')}: {health.get('status')}")
    except requests.RequestException as e:
        st.error(f"API não acessível: {e}")


# UI

st.title("Sistema de Atendimento Psicossocial")

tab1, tab2, tab3 = st.tabs(["Atendimentos", "Novo atendimento", "Editar / Excluir"])


# TAB 1 - Lista

with tab1:
    st.subheader("Atendimentos (mais recentes primeiro)")
    try:
        atendimentos = api_get("/atendimentos")["data"]
        if not atendimentos:
            st.info("Nenhum atendimento cadastrado.")
        else:
            for a in atendimentos:
                st.write(
                    f"- **{a['data']}** | {a['tipo']} | {a['nome']} | Profissional: {a['profissional']}"
                    f" | Obs: {a.get('observacoes') or '-'}"
                )
    except (ApiError, requests.RequestException) as e:
        show_error(e)


# TAB 2 - Cadastro

with tab2:
    st.subheader("Cadastrar atendimento")
    payload = form_payload("novo")

    if st.button("Salvar", key="novo_submit"):
        if not payload["nome"] or not payload["profissional"]:
            st.error("Nome e profissional são obrigatórios.")
        else:
            try:
                res = api_post("/atendimento", payload)
                st.success(f"{res['message']} (ID: {res['data']['id']})")
            except (ApiError, requests.RequestException) as e:
                show_error(e)


# TAB 3 - Edição / exclusão

with tab3:
    st.subheader("Editar ou excluir atendimento")
    atendimento_id = st.number_input("ID", min_value=1, step=1, key="edit_id")

    try:
        atual = api_get(f"/atendimento/{int(atendimento_id)}")["data"]
    except ApiError as e:
        st.info(str(e))
        atual = None
    except requests.RequestException as e:
        show_error(e)
        atual = None

    if atual:
        payload = form_payload(f"edit_{atual['id']}", atual)
        c1, c2 = st.columns(2)

        if c1.button("Atualizar", key="edit_submit"):
            try:
                res = api_put(f"/atendimento/{atual['id']}", payload)
                st.success(res["message"])
            except (ApiError, requests.RequestException) as e:
                show_error(e)

        if c2.button("Excluir", key="delete_submit"):
            try:
                res = api_delete(f"/atendimento/{atual['id']}")
                st.success(res["message"])
            except (ApiError, requests.RequestException) as e:
                show_error(e)
