"""Linha de comando do ComandaZap: banco de dados e textos de impressão."""
import argparse
import sys
from typing import Optional

from core import config
from core.moeda import formatar_moeda
from database.db import criar_engine, reset_database
from repositories.sql import SQLRepository
from services.cardapio_service import CardapioService
from services.comanda_service import ComandaError, ComandaService
from services.logging_service import logger, setup_logging
from services.user_service import UserService


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comandazap",
        description="ComandaZap - comandas de bar e restaurante",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos:
  comandazap init-db --demo
  comandazap recibo 12
  comandazap cozinha 12
  comandazap compartilhar 12 --link
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Mostra o log de auditoria no console")
    parser.add_argument("--log-file", help="Grava o log também neste arquivo")
    parser.add_argument("--db", help=f"Caminho do banco SQLite (padrão: {config.db_path()})")

    subparsers = parser.add_subparsers(dest="command", help="Comandos disponíveis")
    init_db = subparsers.add_parser("init-db", help="Cria as tabelas e o usuário admin padrão")
    init_db.add_argument("--reset", action="store_true", help="Apaga todos os dados antes de criar as tabelas")
    init_db.add_argument("--demo", action="store_true", help="Cadastra um cardápio de exemplo")

    recibo = subparsers.add_parser("recibo", help="Imprime o cupom do cliente")
    recibo.add_argument("comanda_id", type=int)

    # sem estado entre execuções: o ticket sai sempre com a comanda inteira
    cozinha = subparsers.add_parser("cozinha", help="Imprime o ticket da cozinha com todos os itens")
    cozinha.add_argument("comanda_id", type=int)

    compartilhar = subparsers.add_parser("compartilhar", help="Mensagem para enviar ao cliente")
    compartilhar.add_argument("comanda_id", type=int)
    compartilhar.add_argument("--link", action="store_true", help="Mostra o link do WhatsApp em vez do texto")

    resumo = subparsers.add_parser("resumo", help="Resumo de pagamento com dívida anterior")
    resumo.add_argument("comanda_id", type=int)
    return parser


def _repositorio(db: Optional[str]) -> SQLRepository:
    url = f"sqlite:///{db}" if db else None
    return SQLRepository(engine=criar_engine(url))


def _texto_resumo(servico: ComandaService, comanda_id: int) -> str:
    comanda = servico.obter(comanda_id)
    resumo = servico.resumo_pagamento(comanda_id)
    linhas = [f"Comanda {comanda.descricao} ({comanda.status.value})"]
    for rotulo, valor in resumo.conciliacao.linhas:
        linhas.append(f"{rotulo}: {formatar_moeda(valor)}")
    if resumo.conciliacao.credito_disponivel > 0:
        linhas.append(f"Crédito disponível: {formatar_moeda(resumo.conciliacao.credito_disponivel)}")
    return "\n".join(linhas)


def main(argv=None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.verbose or args.log_file:
        setup_logging("DEBUG" if args.verbose else "INFO", args.log_file)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "init-db":
        repo = _repositorio(args.db)
        if args.reset:
            reset_database(repo.engine)
            logger.warning("Banco %s apagado", args.db or config.db_path())
        UserService(repo).garantir_admin_padrao()
        if args.demo:
            CardapioService(repo, usuario="cli").carregar_cardapio_demo()
        print(f"Banco pronto em {args.db or config.db_path()}")
        return 0

    servico = ComandaService(_repositorio(args.db), usuario="cli")
    try:
        if args.command == "recibo":
            print(servico.recibo_cliente(args.comanda_id), end="")
        elif args.command == "cozinha":
            ticket = servico.ticket_cozinha(args.comanda_id, completo=True)
            if ticket is None:
                print("Comanda sem itens.")
            else:
                print(ticket, end="")
        elif args.command == "compartilhar":
            if args.link:
                print(servico.link_compartilhamento(args.comanda_id))
            else:
                print(servico.mensagem_compartilhamento(args.comanda_id))
        elif args.command == "resumo":
            print(_texto_resumo(servico, args.comanda_id))
    except ComandaError as exc:
        logger.error("%s falhou: %s", args.command, exc)
        print(f"Erro: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
