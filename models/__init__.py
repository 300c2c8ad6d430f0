"""Pacote de modelos para o controle de comandas."""

from .entities import (
    Cliente,
    Comanda,
    CreditoCliente,
    ItemCardapio,
    ItemComanda,
    LogEntry,
    Pagamento,
    User,
)
from .enums import (
    CategoriaCardapio,
    FormaPagamento,
    StatusComanda,
    StatusEstoque,
    TipoComanda,
    UserRole,
)

__all__ = [
    "CategoriaCardapio",
    "Cliente",
    "Comanda",
    "CreditoCliente",
    "FormaPagamento",
    "ItemCardapio",
    "ItemComanda",
    "LogEntry",
    "Pagamento",
    "StatusComanda",
    "StatusEstoque",
    "TipoComanda",
    "User",
    "UserRole",
]
