"""Normalização e semelhança de nomes de clientes."""
from __future__ import annotations

from difflib import SequenceMatcher
from typing import Iterable, List, Optional

LIMITE_SIMILARIDADE = 0.7


def normalizar_nome(nome: Optional[str]) -> str:
    return (nome or "").strip().upper()


def mesmo_nome(a: Optional[str], b: Optional[str]) -> bool:
    return normalizar_nome(a) == normalizar_nome(b)


def similaridade(a: str, b: str) -> float:
    """Pontuação entre 0 e 1 sobre os nomes já normalizados."""
    a, b = normalizar_nome(a), normalizar_nome(b)
    if not a or not b:
        return 0.0
    return SequenceMatcher(None, a, b).ratio()


def nomes_parecidos(
    nome: str, candidatos: Iterable[str], limite: float = LIMITE_SIMILARIDADE
) -> List[str]:
    """Candidatos acima do limite, sem contar o próprio nome, do mais parecido ao menos."""
    pontuados = []
    for candidato in candidatos:
        if mesmo_nome(nome, candidato):
            continue
        pontuacao = similaridade(nome, candidato)
        if pontuacao > limite:
            pontuados.append((pontuacao, candidato))
    pontuados.sort(key=lambda par: par[0], reverse=True)
    return [candidato for _, candidato in pontuados]


__all__ = [
    "LIMITE_SIMILARIDADE",
    "normalizar_nome",
    "mesmo_nome",
    "similaridade",
    "nomes_parecidos",
]
