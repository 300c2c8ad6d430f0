"""Totais de uma comanda."""
from __future__ import annotations

from dataclasses import dataclass

from core.moeda import EPSILON_CENTAVO
from models import Comanda


@dataclass(frozen=True)
class TotaisComanda:
    subtotal: float
    pago: float
    restante: float


def subtotal(comanda: Comanda) -> float:
    # Soma as linhas cruas; agrupar é só exibição.
    return sum(item.total for item in comanda.itens if item.item_cardapio is not None)


def total_pago(comanda: Comanda) -> float:
    return sum(p.valor for p in comanda.pagamentos)


def totais_comanda(comanda: Comanda) -> TotaisComanda:
    sub = subtotal(comanda)
    pago = total_pago(comanda)
    return TotaisComanda(subtotal=sub, pago=pago, restante=sub - pago)


def parcialmente_pago(totais: TotaisComanda) -> bool:
    return totais.pago > 0 and totais.restante > EPSILON_CENTAVO


def quitada(totais: TotaisComanda) -> bool:
    return totais.restante <= EPSILON_CENTAVO


def quantidade_itens(comanda: Comanda) -> int:
    return sum(item.quantidade for item in comanda.itens if item.item_cardapio is not None)


__all__ = [
    "TotaisComanda",
    "subtotal",
    "total_pago",
    "totais_comanda",
    "parcialmente_pago",
    "quitada",
    "quantidade_itens",
]
