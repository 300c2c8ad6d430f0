"""Agrupamento de linhas da comanda para exibição e impressão."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List

from models import ItemComanda


def agrupar_itens(itens: Iterable[ItemComanda]) -> List[ItemComanda]:
    """Junta linhas com o mesmo item do cardápio e o mesmo comentário.

    A ordem de saída é a da primeira ocorrência de cada chave. Linhas sem
    item do cardápio são ignoradas e as linhas de entrada não são alteradas.
    """
    agrupados: Dict[tuple, ItemComanda] = {}
    for item in itens:
        if item.item_cardapio is None:
            continue
        existente = agrupados.get(item.chave)
        if existente:
            existente.quantidade += item.quantidade
        else:
            agrupados[item.chave] = replace(item, comentario=item.comentario or "")
    return list(agrupados.values())


def itens_para_imprimir(
    itens: Iterable[ItemComanda], impressos: Iterable[ItemComanda]
) -> List[ItemComanda]:
    """Itens ainda não enviados à cozinha, descontando o que já foi impresso."""
    ja_impresso = {item.chave: item.quantidade for item in agrupar_itens(impressos)}
    novos = []
    for item in agrupar_itens(itens):
        restante = item.quantidade - ja_impresso.get(item.chave, 0)
        if restante > 0:
            novos.append(replace(item, quantidade=restante))
    return novos


__all__ = ["agrupar_itens", "itens_para_imprimir"]
