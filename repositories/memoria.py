"""Repositório em memória, sem persistência entre execuções."""
from __future__ import annotations

from copy import deepcopy
from typing import Dict, List, Optional

from models import (
    Cliente,
    Comanda,
    CreditoCliente,
    ItemCardapio,
    LogEntry,
    User,
)
from repositories.base import Repositorio


class MemoryRepository(Repositorio):
    def __init__(self) -> None:
        self.itens_cardapio: Dict[int, ItemCardapio] = {}
        self.comandas: Dict[int, Comanda] = {}
        self.clientes: Dict[int, Cliente] = {}
        self.creditos: List[CreditoCliente] = []
        self.users: Dict[str, User] = {}
        self.logs: List[LogEntry] = []
        self._seq = 1

    def next_id(self) -> int:
        atual = self._seq
        self._seq += 1
        return atual

    # --- Cardápio ---
    def listar_itens_cardapio(self) -> List[ItemCardapio]:
        return [deepcopy(i) for i in self.itens_cardapio.values()]

    def obter_item_cardapio(self, item_id: int) -> Optional[ItemCardapio]:
        item = self.itens_cardapio.get(item_id)
        return deepcopy(item) if item else None

    def salvar_item_cardapio(self, item: ItemCardapio) -> ItemCardapio:
        if item.id is None:
            item.id = self.next_id()
        self.itens_cardapio[item.id] = deepcopy(item)
        return item

    def excluir_item_cardapio(self, item_id: int) -> None:
        self.itens_cardapio.pop(item_id, None)

    # --- Comandas ---
    def _resolver_itens(self, comanda: Comanda) -> Comanda:
        # As linhas apontam para o cardápio atual, como faria um join.
        copia = deepcopy(comanda)
        for linha in copia.itens:
            if linha.item_cardapio is not None:
                linha.item_cardapio = self.obter_item_cardapio(linha.item_cardapio.id)
        return copia

    def listar_comandas(self) -> List[Comanda]:
        ordenadas = sorted(self.comandas.values(), key=lambda c: (c.criado_em, c.id), reverse=True)
        return [self._resolver_itens(c) for c in ordenadas]

    def obter_comanda(self, comanda_id: int) -> Optional[Comanda]:
        comanda = self.comandas.get(comanda_id)
        return self._resolver_itens(comanda) if comanda else None

    def salvar_comanda(self, comanda: Comanda) -> Comanda:
        if comanda.id is None:
            comanda.id = self.next_id()
        for registro in [*comanda.itens, *comanda.pagamentos]:
            if registro.id is None:
                registro.id = self.next_id()
        self.comandas[comanda.id] = deepcopy(comanda)
        return comanda

    def excluir_comanda(self, comanda_id: int) -> None:
        self.comandas.pop(comanda_id, None)

    # --- Clientes ---
    def listar_clientes(self) -> List[Cliente]:
        return [deepcopy(c) for c in self.clientes.values()]

    def obter_cliente(self, cliente_id: int) -> Optional[Cliente]:
        cliente = self.clientes.get(cliente_id)
        return deepcopy(cliente) if cliente else None

    def salvar_cliente(self, cliente: Cliente) -> Cliente:
        if cliente.id is None:
            cliente.id = self.next_id()
        self.clientes[cliente.id] = deepcopy(cliente)
        return cliente

    def excluir_cliente(self, cliente_id: int) -> None:
        self.clientes.pop(cliente_id, None)
        self.creditos = [c for c in self.creditos if c.cliente_id != cliente_id]

    def listar_creditos(self, cliente_id: Optional[int] = None) -> List[CreditoCliente]:
        creditos = [c for c in self.creditos if cliente_id is None or c.cliente_id == cliente_id]
        creditos.sort(key=lambda c: (c.criado_em, c.id), reverse=True)
        return [deepcopy(c) for c in creditos]

    def adicionar_credito(self, credito: CreditoCliente) -> CreditoCliente:
        credito.id = self.next_id()
        self.creditos.append(deepcopy(credito))
        return credito

    # --- Usuários ---
    def listar_usuarios(self) -> List[User]:
        return [deepcopy(u) for u in self.users.values()]

    def obter_usuario(self, username: str) -> Optional[User]:
        usuario = self.users.get(username)
        return deepcopy(usuario) if usuario else None

    def salvar_usuario(self, usuario: User) -> User:
        if usuario.id is None:
            usuario.id = self.next_id()
        self.users[usuario.username] = deepcopy(usuario)
        return usuario

    # --- Logs ---
    def registrar_log(self, entrada: LogEntry) -> LogEntry:
        entrada.id = self.next_id()
        self.logs.append(deepcopy(entrada))
        return entrada

    def listar_logs(self, limit: int = 100) -> List[LogEntry]:
        return [deepcopy(l) for l in reversed(self.logs)][:limit]
