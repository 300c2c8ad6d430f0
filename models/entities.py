"""Modelos de domínio do controle de comandas.

As estruturas são simples e mantidas em memória; a persistência fica a cargo
dos repositórios, que devolvem sempre estas mesmas classes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from models.enums import CategoriaCardapio, StatusComanda, TipoComanda, UserRole


@dataclass
class ItemCardapio:
    id: Optional[int]
    nome: str
    preco: float
    categoria: CategoriaCardapio = CategoriaCardapio.LANCHES
    codigo: Optional[str] = None
    descricao: str = ""
    estoque: Optional[float] = None
    limite_estoque_baixo: Optional[float] = None
    unidade: Optional[str] = None


@dataclass
class ItemComanda:
    """Linha da comanda. ``item_cardapio`` pode vir ``None`` quando o item
    do cardápio referenciado não existe mais."""

    item_cardapio: Optional[ItemCardapio]
    quantidade: int = 1
    comentario: str = ""
    id: Optional[int] = None

    @property
    def chave(self) -> tuple:
        item_id = self.item_cardapio.id if self.item_cardapio else None
        return (item_id, self.comentario or "")

    @property
    def total(self) -> float:
        if self.item_cardapio is None:
            return 0.0
        return self.item_cardapio.preco * self.quantidade


@dataclass
class Pagamento:
    valor: float
    forma: str
    pago_em: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None


@dataclass
class Comanda:
    id: Optional[int]
    tipo: TipoComanda
    identificador: str
    itens: List[ItemComanda] = field(default_factory=list)
    pagamentos: List[Pagamento] = field(default_factory=list)
    status: StatusComanda = StatusComanda.ABERTA
    criado_em: datetime = field(default_factory=datetime.now)
    pago_em: Optional[datetime] = None
    observacao: Optional[str] = None
    nome_cliente: Optional[str] = None
    usuario: Optional[str] = None

    @property
    def descricao(self) -> str:
        if self.tipo == TipoComanda.MESA:
            return f"Mesa {self.identificador}"
        return self.identificador

    @property
    def paga(self) -> bool:
        return self.status == StatusComanda.PAGA


@dataclass
class Cliente:
    id: Optional[int]
    nome: str
    telefone: Optional[str] = None
    documento: Optional[str] = None
    saldo: float = 0.0
    criado_em: datetime = field(default_factory=datetime.now)


@dataclass
class CreditoCliente:
    """Lançamento no extrato do cliente: positivo é crédito, negativo é débito."""

    cliente_id: int
    valor: float
    forma: str
    criado_em: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None


@dataclass
class User:
    id: Optional[int]
    username: str
    password_hash: str
    role: UserRole = UserRole.COLABORADOR
    nome: str = ""
    email: Optional[str] = None


@dataclass
class LogEntry:
    id: Optional[int]
    acao: str
    detalhes: str
    usuario: Optional[str]
    criado_em: datetime
