from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database.db import Base


class ItemCardapioTabela(Base):
    __tablename__ = "itens_cardapio"

    id = Column(Integer, primary_key=True)
    nome = Column(String(100), nullable=False)
    preco = Column(Float, nullable=False)
    categoria = Column(String(40), nullable=False)
    codigo = Column(String(20))
    descricao = Column(Text, default="")
    estoque = Column(Float)
    limite_estoque_baixo = Column(Float)
    unidade = Column(String(20))


class ComandaTabela(Base):
    __tablename__ = "comandas"

    id = Column(Integer, primary_key=True)
    tipo = Column(String(10), nullable=False)
    identificador = Column(String(100), nullable=False)
    status = Column(String(10), nullable=False)
    criado_em = Column(DateTime, nullable=False)
    pago_em = Column(DateTime)
    observacao = Column(Text)
    nome_cliente = Column(String(100))
    usuario = Column(String(50))

    itens = relationship(
        "ItemComandaTabela",
        cascade="all, delete-orphan",
        order_by="ItemComandaTabela.id",
    )
    pagamentos = relationship(
        "PagamentoTabela",
        cascade="all, delete-orphan",
        order_by="PagamentoTabela.id",
    )


class ItemComandaTabela(Base):
    __tablename__ = "itens_comanda"

    id = Column(Integer, primary_key=True)
    comanda_id = Column(Integer, ForeignKey("comandas.id"), nullable=False)
    # sem chave estrangeira: a linha sobrevive à exclusão do item do cardápio
    item_cardapio_id = Column(Integer)
    quantidade = Column(Integer, nullable=False, default=1)
    comentario = Column(Text, default="")


class PagamentoTabela(Base):
    __tablename__ = "pagamentos"

    id = Column(Integer, primary_key=True)
    comanda_id = Column(Integer, ForeignKey("comandas.id"), nullable=False)
    valor = Column(Float, nullable=False)
    forma = Column(String(30), nullable=False)
    pago_em = Column(DateTime, nullable=False)


class ClienteTabela(Base):
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True)
    nome = Column(String(100), nullable=False)
    telefone = Column(String(30))
    documento = Column(String(30))
    criado_em = Column(DateTime, nullable=False)


class CreditoClienteTabela(Base):
    __tablename__ = "creditos_clientes"

    id = Column(Integer, primary_key=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=False)
    valor = Column(Float, nullable=False)
    forma = Column(String(50), nullable=False)
    criado_em = Column(DateTime, nullable=False)


class UsuarioTabela(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    nome = Column(String(100), default="")
    email = Column(String(100))


class LogTabela(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True)
    acao = Column(String(50), nullable=False)
    detalhes = Column(Text)
    usuario = Column(String(50))
    criado_em = Column(DateTime, nullable=False)
