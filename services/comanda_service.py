"""Regras de negócio das comandas: itens, pagamentos, cozinha e recibos."""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from core.agrupamento import agrupar_itens, itens_para_imprimir
from core.conciliacao import Conciliacao, conciliar
from core.moeda import EPSILON_CENTAVO
from core.nomes import normalizar_nome
from core.recibo import (
    formatar_mensagem_compartilhamento,
    formatar_recibo_cliente,
    formatar_ticket_cozinha,
    link_compartilhamento,
)
from core.saldo import buscar_cliente, divida_anterior, saldo_creditos
from core.totais import TotaisComanda, parcialmente_pago, quitada, totais_comanda
from models import (
    Comanda,
    CreditoCliente,
    FormaPagamento,
    ItemComanda,
    Pagamento,
    StatusComanda,
    TipoComanda,
    User,
    UserRole,
)
from repositories.base import Repositorio
from services import logging_service
from services.cliente_service import ClienteService


class ComandaError(RuntimeError):
    """Erro base para operações de comanda."""


class ComandaNaoEncontradaError(ComandaError):
    pass


class ComandaFechadaError(ComandaError):
    pass


class ItemNaoEncontradoError(ComandaError):
    pass


class PagamentoInvalidoError(ComandaError):
    pass


class SaldoInsuficienteError(PagamentoInvalidoError):
    pass


class EstoqueInsuficienteError(ComandaError):
    pass


@dataclass(frozen=True)
class ResumoPagamento:
    totais: TotaisComanda
    divida_anterior: float
    conciliacao: Conciliacao
    parcialmente_pago: bool


class ComandaService:
    def __init__(self, repo: Repositorio, usuario: str = "operador") -> None:
        self.repo = repo
        self.usuario = usuario
        # itens já enviados à cozinha, por comanda
        self._impressos: Dict[int, List[ItemComanda]] = {}

    # --- helpers ---------------------------------------------------------
    def _obter(self, comanda_id: int) -> Comanda:
        comanda = self.repo.obter_comanda(comanda_id)
        if not comanda:
            raise ComandaNaoEncontradaError(f"Comanda {comanda_id} não encontrada")
        return comanda

    def _obter_editavel(self, comanda_id: int) -> Comanda:
        comanda = self._obter(comanda_id)
        if comanda.status == StatusComanda.PAGA:
            raise ComandaFechadaError(f"Comanda {comanda_id} já está paga")
        return comanda

    def _linha(self, comanda: Comanda, item_cardapio_id: int, comentario: str) -> ItemComanda:
        chave = (item_cardapio_id, comentario or "")
        linha = next((i for i in comanda.itens if i.chave == chave), None)
        if linha is None:
            raise ItemNaoEncontradoError(f"Item {item_cardapio_id} não está na comanda {comanda.id}")
        return linha

    def _movimentar_estoque(self, item_cardapio_id: int, delta: float) -> None:
        item = self.repo.obter_item_cardapio(item_cardapio_id)
        if item is None or item.estoque is None:
            return
        item.estoque = item.estoque + delta
        self.repo.salvar_item_cardapio(item)

    def _salvar(self, comanda: Comanda, acao: str, detalhes: str) -> Comanda:
        self.repo.salvar_comanda(comanda)
        logging_service.registrar(self.repo, acao, self.usuario, detalhes)
        return comanda

    # --- Abertura --------------------------------------------------------
    def abrir_comanda(
        self,
        tipo: TipoComanda,
        identificador,
        telefone: Optional[str] = None,
        nome_cliente: Optional[str] = None,
    ) -> Comanda:
        if tipo == TipoComanda.MESA:
            try:
                numero = int(identificador)
            except (TypeError, ValueError):
                raise ComandaError(f"Número de mesa inválido: {identificador}")
            if numero <= 0:
                raise ComandaError(f"Número de mesa inválido: {identificador}")
            identificador = str(numero)
            ocupada = any(
                c.tipo == TipoComanda.MESA and c.identificador == identificador and c.status != StatusComanda.PAGA
                for c in self.repo.listar_comandas()
            )
            if ocupada:
                raise ComandaError(f"Mesa {numero} já tem comanda aberta")
        else:
            identificador = normalizar_nome(identificador)
            if not identificador:
                raise ComandaError("Informe o nome do cliente")
            if buscar_cliente(identificador, self.repo.listar_clientes()) is None:
                ClienteService(self.repo, self.usuario).criar_cliente(identificador, telefone, confirmar=True)

        comanda = Comanda(
            id=None,
            tipo=tipo,
            identificador=identificador,
            nome_cliente=normalizar_nome(nome_cliente) or None,
            usuario=self.usuario,
        )
        self.repo.salvar_comanda(comanda)
        self._impressos[comanda.id] = []
        logging_service.registrar(self.repo, "ABRIR_COMANDA", self.usuario, f"Comanda {comanda.descricao} aberta")
        return comanda

    def excluir_comanda(self, comanda_id: int) -> None:
        comanda = self._obter(comanda_id)
        if comanda.status != StatusComanda.ABERTA or comanda.itens:
            raise ComandaError("Só é possível excluir comandas abertas e sem itens")
        self.repo.excluir_comanda(comanda_id)
        self._impressos.pop(comanda_id, None)
        logging_service.registrar(self.repo, "EXCLUIR_COMANDA", self.usuario, f"Comanda {comanda.descricao} excluída")

    # --- Consultas -------------------------------------------------------
    def obter(self, comanda_id: int) -> Comanda:
        return self._obter(comanda_id)

    def listar_comandas(self, usuario: Optional[User] = None) -> List[Comanda]:
        """Administradores veem todas as comandas; colaboradores, só as que abriram."""
        comandas = self.repo.listar_comandas()
        if usuario is not None and usuario.role != UserRole.ADMIN:
            comandas = [c for c in comandas if c.usuario == usuario.username]
        return comandas

    def comandas_abertas(self, usuario: Optional[User] = None) -> List[Comanda]:
        return [c for c in self.listar_comandas(usuario) if c.status != StatusComanda.PAGA]

    def comandas_pagas(self, usuario: Optional[User] = None) -> List[Comanda]:
        return [
            c
            for c in self.listar_comandas(usuario)
            if c.status == StatusComanda.PAGA and c.tipo == TipoComanda.NOME
        ]

    def totais(self, comanda_id: int) -> TotaisComanda:
        return totais_comanda(self._obter(comanda_id))

    def itens_agrupados(self, comanda_id: int) -> List[ItemComanda]:
        return agrupar_itens(self._obter(comanda_id).itens)

    # --- Itens -----------------------------------------------------------
    def adicionar_item(
        self, comanda_id: int, item_cardapio_id: int, quantidade: int = 1, comentario: str = ""
    ) -> Comanda:
        if quantidade < 1:
            raise ComandaError("A quantidade deve ser pelo menos 1")
        comanda = self._obter_editavel(comanda_id)
        item_cardapio = self.repo.obter_item_cardapio(item_cardapio_id)
        if item_cardapio is None:
            raise ItemNaoEncontradoError(f"Item {item_cardapio_id} não existe no cardápio")
        if item_cardapio.estoque is not None and quantidade > item_cardapio.estoque:
            raise EstoqueInsuficienteError(
                f"Estoque insuficiente de {item_cardapio.nome}: restam {item_cardapio.estoque:g}"
            )

        comentario = (comentario or "").strip()
        try:
            linha = self._linha(comanda, item_cardapio_id, comentario)
            linha.quantidade += quantidade
        except ItemNaoEncontradoError:
            comanda.itens.append(
                ItemComanda(item_cardapio=item_cardapio, quantidade=quantidade, comentario=comentario)
            )
        self._movimentar_estoque(item_cardapio_id, -quantidade)
        return self._salvar(
            comanda,
            "ADICIONAR_ITEM",
            f"Comanda {comanda.descricao} adicionou {quantidade}x {item_cardapio.nome}",
        )

    def alterar_quantidade(
        self, comanda_id: int, item_cardapio_id: int, delta: int, comentario: str = ""
    ) -> Comanda:
        comanda = self._obter_editavel(comanda_id)
        linha = self._linha(comanda, item_cardapio_id, comentario)
        if delta > 0:
            item_cardapio = self.repo.obter_item_cardapio(item_cardapio_id)
            if item_cardapio is not None and item_cardapio.estoque is not None and delta > item_cardapio.estoque:
                raise EstoqueInsuficienteError(
                    f"Estoque insuficiente de {item_cardapio.nome}: restam {item_cardapio.estoque:g}"
                )
        nova_quantidade = linha.quantidade + delta
        if nova_quantidade > 0:
            linha.quantidade = nova_quantidade
        else:
            comanda.itens.remove(linha)
        devolvido = linha.quantidade if nova_quantidade <= 0 else -delta
        self._movimentar_estoque(item_cardapio_id, devolvido)
        return self._salvar(
            comanda,
            "ALTERAR_QUANTIDADE",
            f"Comanda {comanda.descricao} item {item_cardapio_id} quantidade {max(nova_quantidade, 0)}",
        )

    def remover_item(self, comanda_id: int, item_cardapio_id: int, comentario: str = "") -> Comanda:
        comanda = self._obter_editavel(comanda_id)
        linha = self._linha(comanda, item_cardapio_id, comentario)
        return self.alterar_quantidade(comanda_id, item_cardapio_id, -linha.quantidade, comentario)

    def definir_comentario(
        self, comanda_id: int, item_cardapio_id: int, comentario_atual: str, novo_comentario: str
    ) -> Comanda:
        """Troca o comentário de uma linha; se já existir linha com o novo comentário, as duas se juntam."""
        comanda = self._obter_editavel(comanda_id)
        linha = self._linha(comanda, item_cardapio_id, comentario_atual)
        novo_comentario = (novo_comentario or "").strip()
        if novo_comentario == (linha.comentario or ""):
            return comanda
        comanda.itens.remove(linha)
        try:
            destino = self._linha(comanda, item_cardapio_id, novo_comentario)
            destino.quantidade += linha.quantidade
        except ItemNaoEncontradoError:
            linha.comentario = novo_comentario
            comanda.itens.append(linha)
        return self._salvar(
            comanda, "COMENTARIO_ITEM", f"Comanda {comanda.descricao} item {item_cardapio_id} obs '{novo_comentario}'"
        )

    def definir_observacao(self, comanda_id: int, observacao: Optional[str]) -> Comanda:
        comanda = self._obter_editavel(comanda_id)
        comanda.observacao = (observacao or "").strip() or None
        return self._salvar(comanda, "OBSERVACAO_COMANDA", f"Comanda {comanda.descricao} observação atualizada")

    # --- Pagamento -------------------------------------------------------
    def iniciar_pagamento(self, comanda_id: int) -> Comanda:
        comanda = self._obter_editavel(comanda_id)
        if comanda.status == StatusComanda.PAGANDO:
            return comanda
        comanda.status = StatusComanda.PAGANDO
        return self._salvar(comanda, "INICIAR_PAGAMENTO", f"Comanda {comanda.descricao} em pagamento")

    def _debitar_saldo_cliente(self, comanda: Comanda, valor: float) -> None:
        if comanda.tipo != TipoComanda.NOME:
            raise PagamentoInvalidoError("Pagamento com saldo só vale para comandas por nome")
        cliente = buscar_cliente(comanda.identificador, self.repo.listar_clientes())
        if cliente is None:
            raise PagamentoInvalidoError(f"Cliente {comanda.identificador} não cadastrado")
        disponivel = saldo_creditos(cliente.id, self.repo.listar_creditos(cliente.id))
        if valor > disponivel + EPSILON_CENTAVO:
            raise SaldoInsuficienteError(f"Saldo do cliente insuficiente ({disponivel:.2f})")
        self.repo.adicionar_credito(
            CreditoCliente(
                cliente_id=cliente.id,
                valor=-valor,
                forma=FormaPagamento.SALDO_CLIENTE.value,
                criado_em=datetime.now(),
            )
        )

    def registrar_pagamento(self, comanda_id: int, valor: float, forma: str) -> Comanda:
        comanda = self._obter_editavel(comanda_id)
        if not comanda.itens:
            raise PagamentoInvalidoError("Comanda sem itens")
        if valor <= 0:
            raise PagamentoInvalidoError("Por favor, insira um valor de pagamento positivo.")
        restante = totais_comanda(comanda).restante
        if valor > restante + EPSILON_CENTAVO:
            raise PagamentoInvalidoError("O valor a pagar não pode ser maior que o saldo devedor.")
        forma = forma.value if isinstance(forma, FormaPagamento) else forma
        if forma == FormaPagamento.SALDO_CLIENTE.value:
            self._debitar_saldo_cliente(comanda, valor)

        agora = datetime.now()
        comanda.pagamentos.append(Pagamento(valor=valor, forma=forma, pago_em=agora))
        if quitada(totais_comanda(comanda)):
            comanda.status = StatusComanda.PAGA
            comanda.pago_em = agora
        else:
            comanda.status = StatusComanda.PAGANDO
        return self._salvar(
            comanda, "PAGAMENTO", f"Comanda {comanda.descricao} recebeu {valor:.2f} em {forma}"
        )

    def resumo_pagamento(self, comanda_id: int) -> ResumoPagamento:
        comanda = self._obter(comanda_id)
        totais = totais_comanda(comanda)
        divida = 0.0
        if comanda.tipo == TipoComanda.NOME:
            divida = divida_anterior(
                comanda.identificador,
                self.repo.listar_comandas(),
                self.repo.listar_clientes(),
                self.repo.listar_creditos(),
                excluir_comanda_id=comanda.id,
            )
        return ResumoPagamento(
            totais=totais,
            divida_anterior=divida,
            conciliacao=conciliar(comanda, divida, totais.subtotal, totais.pago),
            parcialmente_pago=parcialmente_pago(totais),
        )

    # --- Cozinha ---------------------------------------------------------
    def _impressos_da_comanda(self, comanda: Comanda) -> List[ItemComanda]:
        # Comanda vista pela primeira vez: o que já está nela conta como impresso.
        if comanda.id not in self._impressos:
            self._impressos[comanda.id] = deepcopy(comanda.itens)
        return self._impressos[comanda.id]

    def itens_para_imprimir(self, comanda_id: int) -> List[ItemComanda]:
        comanda = self._obter(comanda_id)
        return itens_para_imprimir(comanda.itens, self._impressos_da_comanda(comanda))

    def ticket_cozinha(
        self, comanda_id: int, agora: Optional[datetime] = None, completo: bool = False
    ) -> Optional[str]:
        """Ticket com os itens ainda não enviados; ``completo`` reimprime a comanda inteira."""
        comanda = self._obter(comanda_id)
        impressos = [] if completo else self._impressos_da_comanda(comanda)
        novos = itens_para_imprimir(comanda.itens, impressos)
        return formatar_ticket_cozinha(comanda.identificador, comanda.tipo, novos, agora)

    def confirmar_impressao_cozinha(self, comanda_id: int) -> None:
        comanda = self._obter(comanda_id)
        novos = itens_para_imprimir(comanda.itens, self._impressos_da_comanda(comanda))
        self._impressos[comanda.id] = deepcopy(comanda.itens)
        if novos:
            logging_service.registrar(
                self.repo,
                "ENVIAR_COZINHA",
                self.usuario,
                f"Comanda {comanda.descricao} enviou {sum(i.quantidade for i in novos)} itens para cozinha",
            )

    # --- Recibos ---------------------------------------------------------
    def recibo_cliente(self, comanda_id: int, agora: Optional[datetime] = None) -> str:
        comanda = self._obter(comanda_id)
        totais = totais_comanda(comanda)
        return formatar_recibo_cliente(
            comanda,
            agrupar_itens(comanda.itens),
            totais.subtotal,
            totais.pago,
            [p.forma for p in comanda.pagamentos],
            agora=agora,
        )

    def mensagem_compartilhamento(self, comanda_id: int) -> str:
        comanda = self._obter(comanda_id)
        totais = totais_comanda(comanda)
        return formatar_mensagem_compartilhamento(
            comanda, agrupar_itens(comanda.itens), totais.subtotal, totais.pago
        )

    def link_compartilhamento(self, comanda_id: int) -> str:
        return link_compartilhamento(self.mensagem_compartilhamento(comanda_id))


__all__ = [
    "ComandaService",
    "ResumoPagamento",
    "ComandaError",
    "ComandaNaoEncontradaError",
    "ComandaFechadaError",
    "ItemNaoEncontradoError",
    "PagamentoInvalidoError",
    "SaldoInsuficienteError",
    "EstoqueInsuficienteError",
]
