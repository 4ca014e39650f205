from __future__ import annotations

import argparse
import logging

from .config import Settings, load_settings
from .db import Database
from .errors import AtendimentoError, NotFoundError, ValidationError
from .models import TIPOS_VALIDOS
from .services import AtendimentoService


def _format_linha(a: dict) -> str:
    return f"{a['id']} | {a['data'].strftime('%d/%m/%Y')} | {a['tipo']} | {a['nome']} | {a['profissional']}"


def cmd_init(args: argparse.Namespace, db: Database) -> None:
    db.initialize_tables()
    print("Tabela atendimento criada (ou já existente).")


def cmd_list(args: argparse.Namespace, db: Database) -> None:
    atendimentos = AtendimentoService(db).find_all()
    if not atendimentos:
        print("Nenhum atendimento cadastrado.")
        return
    for a in atendimentos:
        print(_format_linha(a))


def cmd_add(args: argparse.Namespace, db: Database) -> None:
    a = AtendimentoService(db).create(
        {
            "nome": args.nome,
            "profissional": args.profissional,
            "data": args.data,
            "tipo": args.tipo,
            "observacoes": args.observacoes,
        }
    )
    print(f"Atendimento criado: {a['id']}")


def cmd_delete(args: argparse.Namespace, db: Database) -> None:
    if not AtendimentoService(db).delete(args.id):
        raise NotFoundError(f"Atendimento {args.id} não encontrado.")
    print("Excluído.")


def cmd_db_info(args: argparse.Namespace, db: Database) -> None:
    total = db.query("SELECT COUNT(*) AS total FROM atendimento")[0]["total"]
    print("ENGINE URL  :", db.engine.url.render_as_string(hide_password=True))
    print("ATENDIMENTOS:", total)


def cmd_serve(args: argparse.Namespace, db: Database) -> None:
    import uvicorn

    from .api_main import create_app

    settings: Settings = args.settings
    uvicorn.run(
        create_app(settings, db),
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="atendimentos", description="CLI do Sistema de Atendimento Psicossocial")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Cria a tabela no banco")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list", help="Lista atendimentos (data mais recente primeiro)")
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add", help="Cadastra atendimento")
    p_add.add_argument("--nome", required=True)
    p_add.add_argument("--profissional", required=True)
    p_add.add_argument("--data", required=True, help="Data ISO, ex: 2024-03-01")
    p_add.add_argument("--tipo", required=True, choices=TIPOS_VALIDOS)
    p_add.add_argument("--observacoes", default=None)
    p_add.set_defaults(func=cmd_add)

    p_del = sub.add_parser("delete", help="Exclui atendimento")
    p_del.add_argument("--id", type=int, required=True)
    p_del.set_defaults(func=cmd_delete)

    p_info = sub.add_parser("db-info", help="Mostra banco em uso e total de registros")
    p_info.set_defaults(func=cmd_db_info)

    p_serve = sub.add_parser("serve", help="Sobe a API HTTP")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=cmd_serve)

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    args.settings = settings

    db = Database.from_settings(settings)
    try:
        db.initialize_tables()  # garante a tabela
        args.func(args, db)
    except ValidationError as e:
        for msg in e.errors:
            print(f"- {msg}")
        raise SystemExit(2)
    except AtendimentoError as e:
        print(e)
        raise SystemExit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
