from __future__ import annotations

from typing import Dict, Iterable, List

from models import ItemCardapio, StatusEstoque


def status_estoque(item: ItemCardapio) -> StatusEstoque:
    limite = item.limite_estoque_baixo
    if item.estoque is None or (item.estoque == 0 and not limite):
        return StatusEstoque.NAO_GERENCIADO
    if item.estoque <= 0:
        return StatusEstoque.ESGOTADO
    if limite and item.estoque <= limite:
        return StatusEstoque.ESTOQUE_BAIXO
    return StatusEstoque.EM_ESTOQUE


def alertas_estoque(itens: Iterable[ItemCardapio]) -> Dict[str, List[ItemCardapio]]:
    """Itens zerados entram como esgotados mesmo sem limite de estoque baixo."""
    alertas: Dict[str, List[ItemCardapio]] = {"baixo": [], "esgotado": []}
    for item in itens:
        if item.estoque is None:
            continue
        if item.estoque <= 0:
            alertas["esgotado"].append(item)
        elif item.limite_estoque_baixo is not None and item.estoque <= item.limite_estoque_baixo:
            alertas["baixo"].append(item)
    return alertas


__all__ = ["status_estoque", "alertas_estoque"]
