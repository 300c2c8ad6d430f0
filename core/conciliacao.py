"""Combina o saldo trazido pelo cliente com o consumo da comanda atual."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from models import Comanda, TipoComanda


@dataclass(frozen=True)
class Conciliacao:
    consumo_do_dia: float
    divida_anterior: float
    divida_total: float
    pago: float
    total_a_pagar: float
    credito_disponivel: float = 0.0
    linhas: List[Tuple[str, float]] = field(default_factory=list)


def conciliar(comanda: Comanda, divida_anterior: float, subtotal: float, pago: float) -> Conciliacao:
    """Calcula o total a pagar de uma comanda considerando o saldo anterior.

    Só saldo negativo (dívida) soma ao que é devido. Crédito positivo é
    devolvido em ``credito_disponivel`` para o operador decidir, sem ser
    abatido do total.
    """
    if comanda.tipo != TipoComanda.NOME:
        divida_anterior = 0.0
    consumo_do_dia = subtotal
    divida_normalizada = min(divida_anterior, 0.0)
    divida_total = divida_normalizada - consumo_do_dia
    total_a_pagar = max(abs(divida_total) - pago, 0.0)

    linhas = []
    if divida_normalizada < 0:
        linhas.append(("Dívida anterior", abs(divida_normalizada)))
    linhas.append(("Consumo do dia", consumo_do_dia))
    if pago > 0:
        linhas.append(("Pago", pago))
    linhas.append(("Total a pagar", total_a_pagar))

    return Conciliacao(
        consumo_do_dia=consumo_do_dia,
        divida_anterior=divida_normalizada,
        divida_total=divida_total,
        pago=pago,
        total_a_pagar=total_a_pagar,
        credito_disponivel=max(divida_anterior, 0.0),
        linhas=linhas,
    )


__all__ = ["Conciliacao", "conciliar"]
