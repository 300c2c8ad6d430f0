"""Textos de impressão: ticket da cozinha, cupom do cliente e mensagem de compartilhamento.

Todas as funções devolvem texto puro; enviar para impressora ou aplicativo de
mensagens é responsabilidade de quem chama.
"""
from __future__ import annotations

import textwrap
from datetime import datetime
from typing import Iterable, List, Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo

from core import config
from core.agrupamento import agrupar_itens
from core.moeda import EPSILON_CENTAVO, formatar_moeda
from models import Comanda, ItemComanda, TipoComanda

LARGURA_TICKET = 32
LARGURA_RECIBO = 40
LINK_WHATSAPP = "https://wa.me/?text="


def _agora(agora: Optional[datetime]) -> datetime:
    fuso = ZoneInfo(config.FUSO_HORARIO)
    if agora is None:
        return datetime.now(fuso)
    if agora.tzinfo is not None:
        return agora.astimezone(fuso)
    return agora


def _rotulo_comanda(identificador, tipo: TipoComanda) -> str:
    if tipo == TipoComanda.MESA:
        return f"Mesa {identificador}"
    return str(identificador)


def _duas_colunas(esquerda: str, direita: str, largura: int = LARGURA_RECIBO, truncar: bool = False) -> List[str]:
    espaco = largura - len(direita) - 1
    if len(esquerda) <= espaco:
        return [esquerda.ljust(espaco) + " " + direita]
    if truncar and espaco > 0:
        return [esquerda[:espaco] + " " + direita]
    return [esquerda[:largura]] + [l.rjust(largura) for l in textwrap.wrap(direita, largura)]


def _linhas_comentario(comentario: str, recuo: str, largura: int) -> List[str]:
    return textwrap.wrap(
        f"Obs: {comentario}",
        width=largura,
        initial_indent=recuo,
        subsequent_indent=recuo + "     ",
    )


def formatar_ticket_cozinha(
    identificador,
    tipo: TipoComanda,
    novos_itens: Iterable[ItemComanda],
    agora: Optional[datetime] = None,
) -> Optional[str]:
    """Ticket com os itens novos da comanda; ``None`` quando não há o que imprimir."""
    itens = agrupar_itens(novos_itens)
    if not itens:
        return None
    linha = "-" * LARGURA_TICKET
    partes = [
        f"Comanda: {_rotulo_comanda(identificador, tipo)}",
        f"Pedido as: {_agora(agora):%H:%M}",
        linha,
    ]
    for item in itens:
        partes.append(f"{item.quantidade}x {item.item_cardapio.nome}")
        if item.comentario:
            partes.append(f"  Obs: {item.comentario}")
    partes.append(linha)
    return "\n".join(partes) + "\n"


def formatar_recibo_cliente(
    comanda: Comanda,
    itens_agrupados: Iterable[ItemComanda],
    subtotal: float,
    pago: float,
    formas_pagamento: Iterable[str],
    agora: Optional[datetime] = None,
    cabecalho: Optional[List[str]] = None,
) -> str:
    largura = LARGURA_RECIBO
    linha = "-" * largura
    cabecalho = cabecalho if cabecalho is not None else config.cabecalho_recibo()

    partes = [texto[:largura].center(largura).rstrip() for texto in cabecalho]
    partes.append(f"{_agora(agora):%d/%m/%Y %H:%M}".center(largura).rstrip())
    partes.append(linha)
    partes.append("CUPOM NAO FISCAL".center(largura).rstrip())
    tipo = "Mesa" if comanda.tipo == TipoComanda.MESA else "Nome"
    partes.append(f"Comanda: {tipo} {comanda.identificador}")
    if comanda.observacao:
        partes.extend(_linhas_comentario(comanda.observacao, "", largura))
    if comanda.pago_em:
        pago_em = _agora(comanda.pago_em)
        partes.append(f"Pago em {pago_em:%d/%m/%Y} às {pago_em:%H:%M}")
    partes.append(linha)

    partes.extend(_duas_colunas("QTD | ITEM", "VALOR", largura))
    for item in itens_agrupados:
        if item.item_cardapio is None:
            continue
        esquerda = f"{item.quantidade:>3} | {item.item_cardapio.nome}"
        partes.extend(_duas_colunas(esquerda, formatar_moeda(item.total), largura, truncar=True))
        if item.comentario:
            partes.extend(_linhas_comentario(item.comentario, " " * 6, largura))
    partes.append(linha)

    partes.extend(_duas_colunas("TOTAL", formatar_moeda(subtotal), largura))
    if pago > 0:
        partes.extend(_duas_colunas("PAGO", formatar_moeda(pago), largura))
        restante = subtotal - pago
        if restante > EPSILON_CENTAVO:
            partes.extend(_duas_colunas("RESTANTE", formatar_moeda(restante), largura))
    formas = list(dict.fromkeys(f for f in formas_pagamento if f))
    if formas:
        partes.extend(_duas_colunas("PAGAMENTO", ", ".join(formas), largura))
    partes.append(linha)
    partes.append("Obrigado pela preferência!".center(largura).rstrip())
    return "\n".join(partes) + "\n"


def formatar_mensagem_compartilhamento(
    comanda: Comanda, itens_agrupados: Iterable[ItemComanda], subtotal: float, pago: float
) -> str:
    cabecalho = f"*Comanda {_rotulo_comanda(comanda.identificador, comanda.tipo)}*\n\n"
    linhas = []
    for item in itens_agrupados:
        if item.item_cardapio is None:
            continue
        texto = f"{item.quantidade}x {item.item_cardapio.nome} - {formatar_moeda(item.total)}"
        if item.comentario:
            texto += f"\n  - {item.comentario}"
        linhas.append(texto)
    mensagem = cabecalho + "\n".join(linhas)
    mensagem += f"\n\n*Total: {formatar_moeda(subtotal)}*"
    if pago > 0:
        mensagem += f"\n*Pago: {formatar_moeda(pago)}*"
        if not comanda.paga:
            mensagem += f"\n*Restante: {formatar_moeda(subtotal - pago)}*"
    return mensagem


def link_compartilhamento(mensagem: str) -> str:
    return LINK_WHATSAPP + quote(mensagem, safe="-_.!~*'()")


__all__ = [
    "LARGURA_TICKET",
    "LARGURA_RECIBO",
    "formatar_ticket_cozinha",
    "formatar_recibo_cliente",
    "formatar_mensagem_compartilhamento",
    "link_compartilhamento",
]
