from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    COLABORADOR = "colaborador"


class TipoComanda(str, Enum):
    MESA = "mesa"
    NOME = "nome"


class StatusComanda(str, Enum):
    ABERTA = "aberta"
    PAGANDO = "pagando"
    PAGA = "paga"


class CategoriaCardapio(str, Enum):
    LANCHES = "Lanches"
    PORCOES = "Porções"
    BEBIDAS = "Bebidas"
    SUCOS = "Sucos"
    SALGADOS = "Salgados"
    PRATOS_QUENTES = "Pratos Quentes"
    SALADAS = "Saladas"
    DESTILADOS = "Destilados"
    CAIPIRINHAS = "Caipirinhas"
    BEBIDAS_QUENTES = "Bebidas Quentes"
    ADICIONAL = "Adicional"
    AGUA_REFRIGERANTE = "Água - Refrigerante"
    CERVEJAS = "Cervejas"


class FormaPagamento(str, Enum):
    DEBITO = "Débito"
    CREDITO = "Crédito"
    PIX = "PIX"
    DINHEIRO = "Dinheiro"
    SALDO_CLIENTE = "Saldo Cliente"


class StatusEstoque(str, Enum):
    NAO_GERENCIADO = "Não gerenciado"
    ESGOTADO = "Esgotado"
    ESTOQUE_BAIXO = "Estoque Baixo"
    EM_ESTOQUE = "Em Estoque"
