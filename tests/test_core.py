import pytest

from core.agrupamento import agrupar_itens, itens_para_imprimir
from core.conciliacao import conciliar
from core.estoque import alertas_estoque, status_estoque
from core.moeda import formatar_moeda
from core.nomes import nomes_parecidos, normalizar_nome, similaridade
from core.saldo import devedores, divida_anterior
from core.totais import parcialmente_pago, quantidade_itens, quitada, subtotal, totais_comanda
from models import (
    Cliente,
    Comanda,
    CreditoCliente,
    ItemCardapio,
    ItemComanda,
    Pagamento,
    StatusComanda,
    StatusEstoque,
    TipoComanda,
)

BURGER = ItemCardapio(id=1, nome="Burger", preco=25.50)
SODA = ItemCardapio(id=2, nome="Soda", preco=8.00)


def linha(item, quantidade=1, comentario=""):
    return ItemComanda(item_cardapio=item, quantidade=quantidade, comentario=comentario)


def comanda_por_nome(comanda_id, nome, itens, pagamentos=(), status=StatusComanda.ABERTA):
    return Comanda(
        id=comanda_id,
        tipo=TipoComanda.NOME,
        identificador=nome,
        itens=list(itens),
        pagamentos=[Pagamento(valor=v, forma="PIX") for v in pagamentos],
        status=status,
    )


def quantidades(itens):
    return {item.chave: item.quantidade for item in itens}


def test_agrupar_soma_mesma_chave_na_ordem_da_primeira_ocorrencia():
    linhas = [
        linha(BURGER, 2),
        linha(SODA),
        linha(BURGER),
        linha(BURGER, comentario="sem cebola"),
        linha(None, 4),
    ]
    agrupados = agrupar_itens(linhas)

    assert [(i.item_cardapio.nome, i.quantidade, i.comentario) for i in agrupados] == [
        ("Burger", 3, ""),
        ("Soda", 1, ""),
        ("Burger", 1, "sem cebola"),
    ]
    # a entrada não é alterada
    assert linhas[0].quantidade == 2


def test_agrupar_idempotente_e_independe_da_ordem():
    linhas = [linha(BURGER), linha(SODA, 2), linha(BURGER, 3), linha(SODA, comentario="gelo")]
    uma_vez = agrupar_itens(linhas)

    assert quantidades(agrupar_itens(uma_vez)) == quantidades(uma_vez)
    assert quantidades(agrupar_itens(list(reversed(linhas)))) == quantidades(uma_vez)
    assert agrupar_itens([]) == []


def test_subtotal_nao_muda_com_agrupamento():
    comanda = comanda_por_nome(1, "ANA", [linha(BURGER), linha(SODA), linha(SODA)])
    agrupada = comanda_por_nome(1, "ANA", agrupar_itens(comanda.itens))
    assert subtotal(comanda) == pytest.approx(subtotal(agrupada))


def test_totais_do_cenario_burger_e_refrigerante():
    comanda = comanda_por_nome(1, "ANA", [linha(BURGER), linha(SODA, 2)])
    totais = totais_comanda(comanda)

    assert totais.subtotal == pytest.approx(41.50)
    assert totais.pago == 0
    assert totais.restante == pytest.approx(41.50)
    assert formatar_moeda(totais.subtotal) == "R$ 41,50"


def test_linha_sem_item_do_cardapio_nao_soma():
    comanda = comanda_por_nome(1, "ANA", [linha(BURGER), linha(None, 3)])
    assert subtotal(comanda) == pytest.approx(25.50)


def test_pagamento_parcial_respeita_tolerancia_de_centavo():
    quase = comanda_por_nome(1, "ANA", [linha(ItemCardapio(id=9, nome="X", preco=10.005))], [10])
    falta = comanda_por_nome(2, "ANA", [linha(ItemCardapio(id=9, nome="X", preco=10.02))], [10])

    assert not parcialmente_pago(totais_comanda(quase))
    assert quitada(totais_comanda(quase))
    assert parcialmente_pago(totais_comanda(falta))
    assert not quitada(totais_comanda(falta))


def test_formatar_moeda():
    assert formatar_moeda(1234.5) == "R$ 1234,50"
    assert formatar_moeda(0) == "R$ 0,00"


def test_divida_anterior_soma_creditos_e_outras_comandas():
    clientes = [Cliente(id=1, nome="Ana")]
    creditos = [CreditoCliente(cliente_id=1, valor=-50, forma="Ajuste"), CreditoCliente(cliente_id=1, valor=20, forma="PIX")]
    outra = comanda_por_nome(2, "ana", [linha(ItemCardapio(id=3, nome="Prato", preco=20))], [5], StatusComanda.PAGANDO)
    paga = comanda_por_nome(4, "ANA", [linha(BURGER)], [25.50], StatusComanda.PAGA)
    atual = comanda_por_nome(3, "ANA", [linha(SODA)])

    comandas = [outra, paga, atual]
    assert divida_anterior("ANA", comandas, clientes, creditos, excluir_comanda_id=3) == pytest.approx(-45)
    assert divida_anterior("BRUNO", comandas, clientes, creditos) == 0


def test_devedores_agrupam_por_nome():
    clientes = [Cliente(id=1, nome="ANA")]
    comandas = [
        comanda_por_nome(1, "ANA", [linha(BURGER)]),
        comanda_por_nome(2, "ana", [linha(SODA)], [3]),
        comanda_por_nome(3, "BRUNO", [linha(SODA)], [8]),
    ]
    lista = devedores(comandas, clientes)

    assert len(lista) == 1
    assert lista[0].nome == "ANA"
    assert lista[0].cliente.id == 1
    assert lista[0].total_divida == pytest.approx(30.50)


def test_conciliacao_soma_divida_anterior():
    comanda = comanda_por_nome(1, "ANA", [])
    resultado = conciliar(comanda, divida_anterior=-20, subtotal=30, pago=0)

    assert resultado.total_a_pagar == pytest.approx(50)
    assert resultado.divida_total == pytest.approx(-50)
    assert resultado.linhas == [("Dívida anterior", 20), ("Consumo do dia", 30), ("Total a pagar", 50)]


def test_conciliacao_credito_nao_abate_total():
    comanda = comanda_por_nome(1, "ANA", [])
    resultado = conciliar(comanda, divida_anterior=15, subtotal=0, pago=0)

    assert resultado.total_a_pagar == 0
    assert resultado.credito_disponivel == 15
    assert resultado.divida_anterior == 0


def test_conciliacao_de_mesa_ignora_divida():
    mesa = Comanda(id=1, tipo=TipoComanda.MESA, identificador="5")
    resultado = conciliar(mesa, divida_anterior=-20, subtotal=30, pago=10)

    assert resultado.total_a_pagar == pytest.approx(20)
    assert ("Pago", 10) in resultado.linhas


def test_conciliacao_repetida_da_mesmo_resultado():
    comanda = comanda_por_nome(1, "ANA", [])
    assert conciliar(comanda, -20, 30, 5) == conciliar(comanda, -20, 30, 5)


def test_itens_para_imprimir_desconta_o_que_ja_saiu():
    impressos = [linha(BURGER, 2)]

    assert itens_para_imprimir([linha(BURGER, 2)], impressos) == []
    novos = itens_para_imprimir([linha(BURGER, 2), linha(BURGER)], impressos)
    assert [(i.item_cardapio.nome, i.quantidade) for i in novos] == [("Burger", 1)]


def test_nomes_parecidos_acima_do_limite():
    assert normalizar_nome("  ana maria ") == "ANA MARIA"
    assert similaridade("joao silva", "JOAO SILVA") == 1.0
    assert similaridade("", "ANA") == 0.0

    candidatos = ["JOAO SILVAA", "PEDRO", "joao silva", "JOAO SILVEIRA"]
    parecidos = nomes_parecidos("Joao Silva", candidatos)
    assert parecidos[0] == "JOAO SILVAA"
    assert "PEDRO" not in parecidos
    assert "joao silva" not in parecidos
    assert nomes_parecidos("Joao Silva", candidatos, limite=1.0) == []


@pytest.mark.parametrize(
    "estoque, limite, esperado",
    [
        (None, None, StatusEstoque.NAO_GERENCIADO),
        (0, None, StatusEstoque.NAO_GERENCIADO),
        (0, 5, StatusEstoque.ESGOTADO),
        (3, 5, StatusEstoque.ESTOQUE_BAIXO),
        (10, 5, StatusEstoque.EM_ESTOQUE),
    ],
)
def test_status_estoque(estoque, limite, esperado):
    item = ItemCardapio(id=1, nome="Cerveja", preco=10, estoque=estoque, limite_estoque_baixo=limite)
    assert status_estoque(item) == esperado


def test_alertas_estoque_separa_baixo_e_esgotado_mesmo_sem_limite():
    itens = [
        ItemCardapio(id=1, nome="A", preco=1, estoque=2, limite_estoque_baixo=5),
        ItemCardapio(id=2, nome="B", preco=1, estoque=0, limite_estoque_baixo=5),
        ItemCardapio(id=3, nome="C", preco=1),
        ItemCardapio(id=4, nome="D", preco=1, estoque=0),
    ]
    alertas = alertas_estoque(itens)
    assert [i.nome for i in alertas["baixo"]] == ["A"]
    assert [i.nome for i in alertas["esgotado"]] == ["B", "D"]
    assert status_estoque(itens[3]) == StatusEstoque.NAO_GERENCIADO


def test_quantidade_itens_ignora_linhas_sem_item():
    comanda = comanda_por_nome(1, "ANA", [linha(BURGER, 2), linha(SODA), linha(None, 5)])
    assert quantidade_itens(comanda) == 3
