"""Regras puras de comandas: agrupamento, totais, saldo e textos de impressão."""
