"""Saldo de clientes: créditos lançados e comandas por nome em aberto.

Convenção de sinal: valor negativo significa que o cliente deve; positivo
significa crédito pré-pago. Nada aqui é guardado entre chamadas, então o
chamador deve passar sempre um retrato atual de comandas e créditos.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from core.moeda import EPSILON_CENTAVO
from core.nomes import normalizar_nome
from core.totais import totais_comanda
from models import Cliente, Comanda, CreditoCliente, StatusComanda, TipoComanda


@dataclass(frozen=True)
class Devedor:
    nome: str
    cliente: Optional[Cliente]
    total_divida: float


def buscar_cliente(nome: str, clientes: Iterable[Cliente]) -> Optional[Cliente]:
    alvo = normalizar_nome(nome)
    return next((c for c in clientes if normalizar_nome(c.nome) == alvo), None)


def saldo_creditos(cliente_id: int, creditos: Iterable[CreditoCliente]) -> float:
    return sum(c.valor for c in creditos if c.cliente_id == cliente_id)


def comandas_em_aberto(nome: str, comandas: Iterable[Comanda]) -> List[Comanda]:
    alvo = normalizar_nome(nome)
    return [
        c
        for c in comandas
        if c.tipo == TipoComanda.NOME
        and c.status != StatusComanda.PAGA
        and normalizar_nome(c.identificador) == alvo
    ]


def divida_anterior(
    nome_cliente: str,
    comandas: Iterable[Comanda],
    clientes: Iterable[Cliente],
    creditos: Iterable[CreditoCliente],
    excluir_comanda_id: Optional[int] = None,
) -> float:
    """Saldo que o cliente traz para uma comanda.

    Soma os lançamentos de crédito do cliente e desconta o que ainda falta
    pagar nas outras comandas por nome dele que não estão pagas. Sem cliente
    cadastrado com esse nome, o resultado é zero.
    """
    cliente = buscar_cliente(nome_cliente, clientes)
    if cliente is None:
        return 0.0
    soma_creditos = saldo_creditos(cliente.id, creditos)
    outras_pendencias = 0.0
    for comanda in comandas_em_aberto(nome_cliente, comandas):
        if comanda.id == excluir_comanda_id:
            continue
        outras_pendencias += totais_comanda(comanda).restante
    return soma_creditos - outras_pendencias


def devedores(comandas: Iterable[Comanda], clientes: Iterable[Cliente]) -> List[Devedor]:
    clientes = list(clientes)
    por_nome: Dict[str, float] = {}
    nomes: Dict[str, str] = {}
    for comanda in comandas:
        if comanda.tipo != TipoComanda.NOME or comanda.status == StatusComanda.PAGA:
            continue
        restante = totais_comanda(comanda).restante
        if restante <= EPSILON_CENTAVO:
            continue
        chave = normalizar_nome(comanda.identificador)
        nomes.setdefault(chave, comanda.identificador)
        por_nome[chave] = por_nome.get(chave, 0.0) + restante
    return [
        Devedor(nome=nomes[chave], cliente=buscar_cliente(chave, clientes), total_divida=total)
        for chave, total in por_nome.items()
    ]


__all__ = [
    "Devedor",
    "buscar_cliente",
    "saldo_creditos",
    "comandas_em_aberto",
    "divida_anterior",
    "devedores",
]
