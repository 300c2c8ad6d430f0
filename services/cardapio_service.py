from typing import Dict, List, Optional

from core.estoque import alertas_estoque, status_estoque
from models import CategoriaCardapio, ItemCardapio, StatusEstoque
from repositories.base import Repositorio
from services import logging_service


class CardapioError(RuntimeError):
    pass


class ItemCardapioNaoEncontradoError(CardapioError):
    pass


CARDAPIO_DEMO = [
    ("X-Bacon", 25.50, CategoriaCardapio.LANCHES),
    ("Batata Frita com Bacon", 35.00, CategoriaCardapio.PORCOES),
    ("Coca-Cola 600ml", 8.00, CategoriaCardapio.AGUA_REFRIGERANTE),
    ("Cerveja Heineken 600ml", 15.00, CategoriaCardapio.CERVEJAS),
    ("Coxinha de Frango", 7.50, CategoriaCardapio.SALGADOS),
    ("Caipirinha de Limão", 18.00, CategoriaCardapio.CAIPIRINHAS),
]


class CardapioService:
    def __init__(self, repo: Repositorio, usuario: str = "operador") -> None:
        self.repo = repo
        self.usuario = usuario

    def _obter(self, item_id: int) -> ItemCardapio:
        item = self.repo.obter_item_cardapio(item_id)
        if not item:
            raise ItemCardapioNaoEncontradoError(f"Item {item_id} não encontrado no cardápio")
        return item

    def criar_item(
        self,
        nome: str,
        preco: float,
        categoria: CategoriaCardapio,
        codigo: Optional[str] = None,
        descricao: str = "",
        estoque: Optional[float] = None,
        limite_estoque_baixo: Optional[float] = None,
        unidade: Optional[str] = None,
    ) -> ItemCardapio:
        if preco <= 0:
            raise CardapioError("O preço deve ser maior que zero.")
        if not nome.strip():
            raise CardapioError("Informe o nome do item.")
        item = ItemCardapio(
            id=None,
            nome=nome.strip(),
            preco=preco,
            categoria=categoria,
            codigo=codigo,
            descricao=descricao,
            estoque=estoque,
            limite_estoque_baixo=limite_estoque_baixo,
            unidade=unidade,
        )
        self.repo.salvar_item_cardapio(item)
        logging_service.registrar(
            self.repo, "CRIAR_ITEM", self.usuario, f"Item {item.nome} criado na categoria {categoria.value}"
        )
        return item

    def atualizar_item(
        self,
        item_id: int,
        nome: Optional[str] = None,
        preco: Optional[float] = None,
        categoria: Optional[CategoriaCardapio] = None,
        descricao: Optional[str] = None,
    ) -> ItemCardapio:
        item = self._obter(item_id)
        if preco is not None:
            if preco <= 0:
                raise CardapioError("O preço deve ser maior que zero.")
            item.preco = preco
        if nome is not None:
            item.nome = nome.strip()
        if categoria is not None:
            item.categoria = categoria
        if descricao is not None:
            item.descricao = descricao
        self.repo.salvar_item_cardapio(item)
        logging_service.registrar(self.repo, "ATUALIZAR_ITEM", self.usuario, f"Item {item_id} atualizado")
        return item

    def excluir_item(self, item_id: int) -> None:
        item = self._obter(item_id)
        self.repo.excluir_item_cardapio(item_id)
        logging_service.registrar(self.repo, "EXCLUIR_ITEM", self.usuario, f"Item {item.nome} excluído")

    def carregar_cardapio_demo(self) -> List[ItemCardapio]:
        """Cadastra um cardápio de exemplo quando ainda não há itens."""
        if self.repo.listar_itens_cardapio():
            return []
        return [self.criar_item(nome, preco, categoria) for nome, preco, categoria in CARDAPIO_DEMO]

    def listar(self, categoria: Optional[CategoriaCardapio] = None) -> List[ItemCardapio]:
        itens = self.repo.listar_itens_cardapio()
        if categoria is not None:
            itens = [i for i in itens if i.categoria == categoria]
        return sorted(itens, key=lambda i: (i.categoria.value, i.nome))

    # --- Estoque ---
    def ajustar_estoque(
        self, item_id: int, estoque: Optional[float], limite_estoque_baixo: Optional[float] = None
    ) -> ItemCardapio:
        if estoque is not None and estoque < 0:
            raise CardapioError("O estoque não pode ser negativo.")
        item = self._obter(item_id)
        item.estoque = estoque
        item.limite_estoque_baixo = limite_estoque_baixo
        self.repo.salvar_item_cardapio(item)
        logging_service.registrar(
            self.repo, "AJUSTAR_ESTOQUE", self.usuario, f"Estoque de {item.nome} ajustado para {estoque}"
        )
        return item

    def status(self, item_id: int) -> StatusEstoque:
        return status_estoque(self._obter(item_id))

    def alertas(self) -> Dict[str, List[ItemCardapio]]:
        return alertas_estoque(self.repo.listar_itens_cardapio())


__all__ = ["CardapioService", "CardapioError", "ItemCardapioNaoEncontradoError"]
