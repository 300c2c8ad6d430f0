"""Formatação monetária e tolerância de comparação de valores."""

# Única tolerância usada nas comparações de valores (quitado, parcial, limite de pagamento).
EPSILON_CENTAVO = 0.01


def formatar_moeda(valor: float) -> str:
    """Formata ``1234.5`` como ``"R$ 1234,50"``."""
    return f"R$ {valor:.2f}".replace(".", ",")


__all__ = ["EPSILON_CENTAVO", "formatar_moeda"]
