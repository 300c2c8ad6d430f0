"""Interface de persistência usada pelos serviços.

Os serviços só conhecem esta interface; a implementação em memória serve
para testes e demonstração e a implementação SQL guarda tudo via SQLAlchemy.
Os objetos devolvidos são cópias: alterá-los não muda nada até ``salvar_*``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from models import Cliente, Comanda, CreditoCliente, ItemCardapio, LogEntry, User


class Repositorio(ABC):
    # --- Cardápio ---
    @abstractmethod
    def listar_itens_cardapio(self) -> List[ItemCardapio]: ...

    @abstractmethod
    def obter_item_cardapio(self, item_id: int) -> Optional[ItemCardapio]: ...

    @abstractmethod
    def salvar_item_cardapio(self, item: ItemCardapio) -> ItemCardapio: ...

    @abstractmethod
    def excluir_item_cardapio(self, item_id: int) -> None: ...

    # --- Comandas ---
    @abstractmethod
    def listar_comandas(self) -> List[Comanda]:
        """Comandas da mais recente para a mais antiga."""

    @abstractmethod
    def obter_comanda(self, comanda_id: int) -> Optional[Comanda]: ...

    @abstractmethod
    def salvar_comanda(self, comanda: Comanda) -> Comanda: ...

    @abstractmethod
    def excluir_comanda(self, comanda_id: int) -> None: ...

    # --- Clientes ---
    @abstractmethod
    def listar_clientes(self) -> List[Cliente]: ...

    @abstractmethod
    def obter_cliente(self, cliente_id: int) -> Optional[Cliente]: ...

    @abstractmethod
    def salvar_cliente(self, cliente: Cliente) -> Cliente: ...

    @abstractmethod
    def excluir_cliente(self, cliente_id: int) -> None:
        """Remove o cliente e os lançamentos do extrato dele."""

    @abstractmethod
    def listar_creditos(self, cliente_id: Optional[int] = None) -> List[CreditoCliente]:
        """Lançamentos do mais recente para o mais antigo."""

    @abstractmethod
    def adicionar_credito(self, credito: CreditoCliente) -> CreditoCliente: ...

    # --- Usuários ---
    @abstractmethod
    def listar_usuarios(self) -> List[User]: ...

    @abstractmethod
    def obter_usuario(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def salvar_usuario(self, usuario: User) -> User: ...

    # --- Logs ---
    @abstractmethod
    def registrar_log(self, entrada: LogEntry) -> LogEntry: ...

    @abstractmethod
    def listar_logs(self, limit: int = 100) -> List[LogEntry]:
        """Entradas da mais recente para a mais antiga."""
