"""Repositório persistente sobre SQLAlchemy (SQLite por padrão)."""
from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from database.db import criar_engine, criar_fabrica_sessoes, criar_tabelas
from database.tabelas import (
    ClienteTabela,
    ComandaTabela,
    CreditoClienteTabela,
    ItemCardapioTabela,
    ItemComandaTabela,
    LogTabela,
    PagamentoTabela,
    UsuarioTabela,
)
from models import (
    CategoriaCardapio,
    Cliente,
    Comanda,
    CreditoCliente,
    ItemCardapio,
    ItemComanda,
    LogEntry,
    Pagamento,
    StatusComanda,
    TipoComanda,
    User,
    UserRole,
)
from repositories.base import Repositorio


class RepositorioError(RuntimeError):
    pass


def _para_item_cardapio(row: ItemCardapioTabela) -> ItemCardapio:
    return ItemCardapio(
        id=row.id,
        nome=row.nome,
        preco=row.preco,
        categoria=CategoriaCardapio(row.categoria),
        codigo=row.codigo,
        descricao=row.descricao or "",
        estoque=row.estoque,
        limite_estoque_baixo=row.limite_estoque_baixo,
        unidade=row.unidade,
    )


def _para_comanda(row: ComandaTabela, cardapio: Dict[int, ItemCardapio]) -> Comanda:
    return Comanda(
        id=row.id,
        tipo=TipoComanda(row.tipo),
        identificador=row.identificador,
        itens=[
            ItemComanda(
                id=linha.id,
                item_cardapio=cardapio.get(linha.item_cardapio_id),
                quantidade=linha.quantidade,
                comentario=linha.comentario or "",
            )
            for linha in row.itens
        ],
        pagamentos=[
            Pagamento(id=p.id, valor=p.valor, forma=p.forma, pago_em=p.pago_em)
            for p in row.pagamentos
        ],
        status=StatusComanda(row.status),
        criado_em=row.criado_em,
        pago_em=row.pago_em,
        observacao=row.observacao,
        nome_cliente=row.nome_cliente,
        usuario=row.usuario,
    )


def _para_cliente(row: ClienteTabela) -> Cliente:
    return Cliente(
        id=row.id,
        nome=row.nome,
        telefone=row.telefone,
        documento=row.documento,
        criado_em=row.criado_em,
    )


def _para_credito(row: CreditoClienteTabela) -> CreditoCliente:
    return CreditoCliente(
        id=row.id, cliente_id=row.cliente_id, valor=row.valor, forma=row.forma, criado_em=row.criado_em
    )


def _para_usuario(row: UsuarioTabela) -> User:
    return User(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        role=UserRole(row.role),
        nome=row.nome or "",
        email=row.email,
    )


class SQLRepository(Repositorio):
    def __init__(self, engine: Optional[Engine] = None, database_url: Optional[str] = None) -> None:
        self.engine = engine or criar_engine(database_url)
        criar_tabelas(self.engine)
        self.SessionLocal = criar_fabrica_sessoes(self.engine)

    def _cardapio(self, sessao) -> Dict[int, ItemCardapio]:
        return {row.id: _para_item_cardapio(row) for row in sessao.query(ItemCardapioTabela).all()}

    # --- Cardápio ---
    def listar_itens_cardapio(self) -> List[ItemCardapio]:
        with self.SessionLocal() as sessao:
            rows = sessao.query(ItemCardapioTabela).order_by(ItemCardapioTabela.id).all()
            return [_para_item_cardapio(row) for row in rows]

    def obter_item_cardapio(self, item_id: int) -> Optional[ItemCardapio]:
        with self.SessionLocal() as sessao:
            row = sessao.get(ItemCardapioTabela, item_id)
            return _para_item_cardapio(row) if row else None

    def salvar_item_cardapio(self, item: ItemCardapio) -> ItemCardapio:
        with self.SessionLocal() as sessao:
            row = sessao.get(ItemCardapioTabela, item.id) if item.id is not None else None
            if row is None:
                row = ItemCardapioTabela(id=item.id)
                sessao.add(row)
            row.nome = item.nome
            row.preco = item.preco
            row.categoria = item.categoria.value
            row.codigo = item.codigo
            row.descricao = item.descricao
            row.estoque = item.estoque
            row.limite_estoque_baixo = item.limite_estoque_baixo
            row.unidade = item.unidade
            sessao.commit()
            item.id = row.id
        return item

    def excluir_item_cardapio(self, item_id: int) -> None:
        with self.SessionLocal() as sessao:
            row = sessao.get(ItemCardapioTabela, item_id)
            if row:
                sessao.delete(row)
                sessao.commit()

    # --- Comandas ---
    def _consultar_comandas(self, sessao):
        return sessao.query(ComandaTabela).options(
            selectinload(ComandaTabela.itens), selectinload(ComandaTabela.pagamentos)
        )

    def listar_comandas(self) -> List[Comanda]:
        with self.SessionLocal() as sessao:
            cardapio = self._cardapio(sessao)
            rows = (
                self._consultar_comandas(sessao)
                .order_by(ComandaTabela.criado_em.desc(), ComandaTabela.id.desc())
                .all()
            )
            return [_para_comanda(row, cardapio) for row in rows]

    def obter_comanda(self, comanda_id: int) -> Optional[Comanda]:
        with self.SessionLocal() as sessao:
            row = self._consultar_comandas(sessao).filter(ComandaTabela.id == comanda_id).first()
            if row is None:
                return None
            return _para_comanda(row, self._cardapio(sessao))

    def salvar_comanda(self, comanda: Comanda) -> Comanda:
        with self.SessionLocal() as sessao:
            row = sessao.get(ComandaTabela, comanda.id) if comanda.id is not None else None
            if row is None:
                row = ComandaTabela(id=comanda.id)
                sessao.add(row)
            row.tipo = comanda.tipo.value
            row.identificador = str(comanda.identificador)
            row.status = comanda.status.value
            row.criado_em = comanda.criado_em
            row.pago_em = comanda.pago_em
            row.observacao = comanda.observacao
            row.nome_cliente = comanda.nome_cliente
            row.usuario = comanda.usuario

            # itens e pagamentos são regravados junto com a comanda
            row.itens.clear()
            linhas = []
            for item in comanda.itens:
                linha = ItemComandaTabela(
                    item_cardapio_id=item.item_cardapio.id if item.item_cardapio else None,
                    quantidade=item.quantidade,
                    comentario=item.comentario or "",
                )
                row.itens.append(linha)
                linhas.append((item, linha))
            row.pagamentos.clear()
            pagamentos = []
            for pagamento in comanda.pagamentos:
                registro = PagamentoTabela(valor=pagamento.valor, forma=pagamento.forma, pago_em=pagamento.pago_em)
                row.pagamentos.append(registro)
                pagamentos.append((pagamento, registro))
            sessao.commit()

            comanda.id = row.id
            for item, linha in linhas:
                item.id = linha.id
            for pagamento, registro in pagamentos:
                pagamento.id = registro.id
        return comanda

    def excluir_comanda(self, comanda_id: int) -> None:
        with self.SessionLocal() as sessao:
            row = sessao.get(ComandaTabela, comanda_id)
            if row:
                sessao.delete(row)
                sessao.commit()

    # --- Clientes ---
    def listar_clientes(self) -> List[Cliente]:
        with self.SessionLocal() as sessao:
            return [_para_cliente(row) for row in sessao.query(ClienteTabela).order_by(ClienteTabela.nome).all()]

    def obter_cliente(self, cliente_id: int) -> Optional[Cliente]:
        with self.SessionLocal() as sessao:
            row = sessao.get(ClienteTabela, cliente_id)
            return _para_cliente(row) if row else None

    def salvar_cliente(self, cliente: Cliente) -> Cliente:
        with self.SessionLocal() as sessao:
            row = sessao.get(ClienteTabela, cliente.id) if cliente.id is not None else None
            if row is None:
                row = ClienteTabela(id=cliente.id, criado_em=cliente.criado_em)
                sessao.add(row)
            row.nome = cliente.nome
            row.telefone = cliente.telefone
            row.documento = cliente.documento
            sessao.commit()
            cliente.id = row.id
        return cliente

    def excluir_cliente(self, cliente_id: int) -> None:
        with self.SessionLocal() as sessao:
            sessao.query(CreditoClienteTabela).filter(CreditoClienteTabela.cliente_id == cliente_id).delete()
            row = sessao.get(ClienteTabela, cliente_id)
            if row:
                sessao.delete(row)
            sessao.commit()

    def listar_creditos(self, cliente_id: Optional[int] = None) -> List[CreditoCliente]:
        with self.SessionLocal() as sessao:
            query = sessao.query(CreditoClienteTabela)
            if cliente_id is not None:
                query = query.filter(CreditoClienteTabela.cliente_id == cliente_id)
            rows = query.order_by(CreditoClienteTabela.criado_em.desc(), CreditoClienteTabela.id.desc()).all()
            return [_para_credito(row) for row in rows]

    def adicionar_credito(self, credito: CreditoCliente) -> CreditoCliente:
        with self.SessionLocal() as sessao:
            row = CreditoClienteTabela(
                cliente_id=credito.cliente_id,
                valor=credito.valor,
                forma=credito.forma,
                criado_em=credito.criado_em,
            )
            sessao.add(row)
            sessao.commit()
            credito.id = row.id
        return credito

    # --- Usuários ---
    def listar_usuarios(self) -> List[User]:
        with self.SessionLocal() as sessao:
            return [_para_usuario(row) for row in sessao.query(UsuarioTabela).order_by(UsuarioTabela.username).all()]

    def obter_usuario(self, username: str) -> Optional[User]:
        with self.SessionLocal() as sessao:
            row = sessao.query(UsuarioTabela).filter_by(username=username).first()
            return _para_usuario(row) if row else None

    def salvar_usuario(self, usuario: User) -> User:
        sessao = self.SessionLocal()
        try:
            row = sessao.get(UsuarioTabela, usuario.id) if usuario.id is not None else None
            if row is None:
                row = UsuarioTabela(id=usuario.id)
                sessao.add(row)
            row.username = usuario.username
            row.password_hash = usuario.password_hash
            row.role = usuario.role.value
            row.nome = usuario.nome
            row.email = usuario.email
            sessao.commit()
            usuario.id = row.id
        except IntegrityError:
            sessao.rollback()
            raise RepositorioError(f"Já existe um usuário chamado {usuario.username}")
        finally:
            sessao.close()
        return usuario

    # --- Logs ---
    def registrar_log(self, entrada: LogEntry) -> LogEntry:
        with self.SessionLocal() as sessao:
            row = LogTabela(
                acao=entrada.acao,
                detalhes=entrada.detalhes,
                usuario=entrada.usuario,
                criado_em=entrada.criado_em,
            )
            sessao.add(row)
            sessao.commit()
            entrada.id = row.id
        return entrada

    def listar_logs(self, limit: int = 100) -> List[LogEntry]:
        with self.SessionLocal() as sessao:
            rows = sessao.query(LogTabela).order_by(LogTabela.id.desc()).limit(limit).all()
            return [
                LogEntry(id=r.id, acao=r.acao, detalhes=r.detalhes or "", usuario=r.usuario, criado_em=r.criado_em)
                for r in rows
            ]
