"""Cadastro de clientes e extrato de créditos/débitos."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from core.nomes import mesmo_nome, nomes_parecidos, normalizar_nome
from core.saldo import Devedor, buscar_cliente, comandas_em_aberto, devedores, saldo_creditos
from models import Cliente, Comanda, CreditoCliente, StatusComanda, TipoComanda
from repositories.base import Repositorio
from services import logging_service


class ClienteError(RuntimeError):
    """Erro base para operações de clientes."""


class ClienteNaoEncontradoError(ClienteError):
    pass


class ClienteDuplicadoError(ClienteError):
    pass


class ClienteSimilarError(ClienteError):
    """Já existe cliente com nome parecido; repetir com ``confirmar=True`` para criar mesmo assim."""

    def __init__(self, nome: str, similares: List[str]) -> None:
        self.nome = nome
        self.similares = similares
        super().__init__(f"Existem clientes com nome parecido com {nome}: {', '.join(similares)}")


class ClienteService:
    def __init__(self, repo: Repositorio, usuario: str = "operador") -> None:
        self.repo = repo
        self.usuario = usuario

    # --- helpers ---------------------------------------------------------
    def _obter(self, cliente_id: int) -> Cliente:
        cliente = self.repo.obter_cliente(cliente_id)
        if not cliente:
            raise ClienteNaoEncontradoError(f"Cliente {cliente_id} não encontrado")
        cliente.saldo = saldo_creditos(cliente.id, self.repo.listar_creditos(cliente.id))
        return cliente

    # --- Consultas -------------------------------------------------------
    def listar(self) -> List[Cliente]:
        creditos = self.repo.listar_creditos()
        clientes = self.repo.listar_clientes()
        for cliente in clientes:
            cliente.saldo = saldo_creditos(cliente.id, creditos)
        return sorted(clientes, key=lambda c: normalizar_nome(c.nome))

    def obter(self, cliente_id: int) -> Cliente:
        return self._obter(cliente_id)

    def buscar_por_nome(self, nome: str) -> Optional[Cliente]:
        cliente = buscar_cliente(nome, self.repo.listar_clientes())
        return self._obter(cliente.id) if cliente else None

    def buscar(self, texto: str, limite: int = 5) -> List[Cliente]:
        termo = normalizar_nome(texto)
        if not termo:
            return []
        return [c for c in self.listar() if termo in normalizar_nome(c.nome)][:limite]

    # --- Cadastro --------------------------------------------------------
    def criar_cliente(
        self,
        nome: str,
        telefone: Optional[str] = None,
        documento: Optional[str] = None,
        confirmar: bool = False,
    ) -> Cliente:
        nome = nome.strip()
        if not nome:
            raise ClienteError("Informe o nome do cliente")
        existentes = self.repo.listar_clientes()
        if buscar_cliente(nome, existentes):
            raise ClienteDuplicadoError(f"Já existe um cliente chamado {nome}")
        similares = nomes_parecidos(nome, [c.nome for c in existentes])
        if similares and not confirmar:
            raise ClienteSimilarError(nome, similares)

        cliente = Cliente(id=None, nome=nome, telefone=telefone or None, documento=documento or None)
        self.repo.salvar_cliente(cliente)
        logging_service.registrar(self.repo, "CRIAR_CLIENTE", self.usuario, f"Cliente {nome} criado")
        return cliente

    def atualizar_cliente(
        self,
        cliente_id: int,
        nome: Optional[str] = None,
        telefone: Optional[str] = None,
        documento: Optional[str] = None,
    ) -> Cliente:
        cliente = self._obter(cliente_id)
        if nome is not None and not mesmo_nome(nome, cliente.nome):
            outro = buscar_cliente(nome, self.repo.listar_clientes())
            if outro and outro.id != cliente_id:
                raise ClienteDuplicadoError(f"Já existe um cliente chamado {nome.strip()}")
            cliente.nome = nome.strip()
        if telefone is not None:
            cliente.telefone = telefone or None
        if documento is not None:
            cliente.documento = documento or None
        self.repo.salvar_cliente(cliente)
        logging_service.registrar(self.repo, "ATUALIZAR_CLIENTE", self.usuario, f"Cliente {cliente_id} atualizado")
        return cliente

    def excluir_cliente(self, cliente_id: int) -> None:
        cliente = self._obter(cliente_id)
        if comandas_em_aberto(cliente.nome, self.repo.listar_comandas()):
            raise ClienteError(f"Cliente {cliente.nome} tem comandas em aberto")
        self.repo.excluir_cliente(cliente_id)
        logging_service.registrar(self.repo, "EXCLUIR_CLIENTE", self.usuario, f"Cliente {cliente.nome} excluído")

    # --- Extrato ---------------------------------------------------------
    def adicionar_credito(self, cliente_id: int, valor: float, forma: str) -> CreditoCliente:
        if valor <= 0:
            raise ClienteError("Insira um valor positivo.")
        if not forma:
            raise ClienteError("Selecione a forma de pagamento.")
        cliente = self._obter(cliente_id)
        credito = self.repo.adicionar_credito(
            CreditoCliente(cliente_id=cliente.id, valor=valor, forma=forma, criado_em=datetime.now())
        )
        logging_service.registrar(
            self.repo, "CREDITO_CLIENTE", self.usuario, f"Crédito de {valor:.2f} ({forma}) para {cliente.nome}"
        )
        return credito

    def registrar_debito(self, cliente_id: int, valor: float, motivo: str) -> CreditoCliente:
        if valor <= 0:
            raise ClienteError("Insira um valor positivo.")
        cliente = self._obter(cliente_id)
        debito = self.repo.adicionar_credito(
            CreditoCliente(cliente_id=cliente.id, valor=-valor, forma=motivo or "Ajuste", criado_em=datetime.now())
        )
        logging_service.registrar(
            self.repo, "DEBITO_CLIENTE", self.usuario, f"Débito de {valor:.2f} ({motivo}) para {cliente.nome}"
        )
        return debito

    def saldo(self, cliente_id: int) -> float:
        return self._obter(cliente_id).saldo

    def extrato(self, cliente_id: int) -> List[CreditoCliente]:
        self._obter(cliente_id)
        return self.repo.listar_creditos(cliente_id)

    def historico(self, cliente_id: int) -> List[Comanda]:
        """Comandas por nome já pagas, da mais recente para a mais antiga."""
        cliente = self._obter(cliente_id)
        return [
            c
            for c in self.repo.listar_comandas()
            if c.tipo == TipoComanda.NOME
            and c.status == StatusComanda.PAGA
            and mesmo_nome(c.identificador, cliente.nome)
        ]

    def devedores(self) -> List[Devedor]:
        return devedores(self.repo.listar_comandas(), self.repo.listar_clientes())


__all__ = [
    "ClienteService",
    "ClienteError",
    "ClienteNaoEncontradoError",
    "ClienteDuplicadoError",
    "ClienteSimilarError",
]
