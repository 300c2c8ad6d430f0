import pytest

import main
from models import CategoriaCardapio, FormaPagamento, StatusComanda, TipoComanda, User, UserRole
from repositories.sql import RepositorioError, SQLRepository
from services.cardapio_service import CardapioService
from services.cliente_service import ClienteService
from services.comanda_service import ComandaService


@pytest.fixture
def sql_repo(temp_db_path):
    return SQLRepository(database_url=f"sqlite:///{temp_db_path}")


def test_comanda_persiste_itens_e_pagamentos(sql_repo, temp_db_path):
    cardapio = CardapioService(sql_repo)
    cerveja = cardapio.criar_item("Cerveja", 12.0, CategoriaCardapio.CERVEJAS, estoque=24)
    porcao = cardapio.criar_item("Calabresa", 38.0, CategoriaCardapio.PORCOES)

    servico = ComandaService(sql_repo, usuario="admin")
    comanda = servico.abrir_comanda(TipoComanda.NOME, "Marcos")
    servico.adicionar_item(comanda.id, cerveja.id, quantidade=3)
    servico.adicionar_item(comanda.id, porcao.id, comentario="bem passada")
    servico.registrar_pagamento(comanda.id, 20, FormaPagamento.PIX)

    outro = SQLRepository(database_url=f"sqlite:///{temp_db_path}")
    salva = outro.obter_comanda(comanda.id)
    assert salva.identificador == "MARCOS"
    assert salva.status == StatusComanda.PAGANDO
    assert [(i.item_cardapio.nome, i.quantidade, i.comentario) for i in salva.itens] == [
        ("Cerveja", 3, ""),
        ("Calabresa", 1, "bem passada"),
    ]
    assert [(p.valor, p.forma) for p in salva.pagamentos] == [(20, "PIX")]
    assert outro.obter_item_cardapio(cerveja.id).estoque == 21
    assert ClienteService(outro).buscar_por_nome("marcos") is not None
    assert outro.listar_logs(1)[0].acao == "PAGAMENTO"


def test_item_excluido_do_cardapio_fica_sem_referencia(sql_repo):
    item = CardapioService(sql_repo).criar_item("Água", 4.0, CategoriaCardapio.AGUA_REFRIGERANTE)
    servico = ComandaService(sql_repo)
    comanda = servico.abrir_comanda(TipoComanda.MESA, 1)
    servico.adicionar_item(comanda.id, item.id, quantidade=2)

    sql_repo.excluir_item_cardapio(item.id)
    salva = sql_repo.obter_comanda(comanda.id)
    assert salva.itens[0].item_cardapio is None
    assert servico.totais(comanda.id).subtotal == 0


def test_usuario_unico(sql_repo):
    sql_repo.salvar_usuario(User(id=None, username="ana", password_hash="h", role=UserRole.ADMIN))
    with pytest.raises(RepositorioError):
        sql_repo.salvar_usuario(User(id=None, username="ana", password_hash="h"))
    assert [u.username for u in sql_repo.listar_usuarios()] == ["ana"]


def test_excluir_cliente_remove_creditos(sql_repo):
    clientes = ClienteService(sql_repo)
    cliente = clientes.criar_cliente("Paula")
    clientes.adicionar_credito(cliente.id, 15, "Dinheiro")

    clientes.excluir_cliente(cliente.id)
    assert sql_repo.obter_cliente(cliente.id) is None
    assert sql_repo.listar_creditos() == []


def test_cli_imprime_recibo(sql_repo, temp_db_path, capsys):
    assert main.main(["--db", str(temp_db_path), "init-db"]) == 0
    assert sql_repo.obter_usuario("admin") is not None

    item = CardapioService(sql_repo).criar_item("Pastel", 9.0, CategoriaCardapio.SALGADOS)
    servico = ComandaService(sql_repo)
    comanda = servico.abrir_comanda(TipoComanda.MESA, 3)
    servico.adicionar_item(comanda.id, item.id, quantidade=2)
    capsys.readouterr()

    assert main.main(["--db", str(temp_db_path), "recibo", str(comanda.id)]) == 0
    saida = capsys.readouterr().out
    assert "CUPOM NAO FISCAL" in saida
    assert "R$ 18,00" in saida

    assert main.main(["--db", str(temp_db_path), "cozinha", str(comanda.id)]) == 0
    assert "2x Pastel" in capsys.readouterr().out

    assert main.main(["--db", str(temp_db_path), "resumo", str(comanda.id)]) == 0
    assert "Total a pagar: R$ 18,00" in capsys.readouterr().out

    assert main.main(["--db", str(temp_db_path), "recibo", "999"]) == 2


def test_cli_init_db_demo_e_reset(sql_repo, temp_db_path):
    assert main.main(["--db", str(temp_db_path), "init-db", "--demo"]) == 0
    assert len(sql_repo.listar_itens_cardapio()) == 6

    assert main.main(["--db", str(temp_db_path), "init-db", "--reset"]) == 0
    assert sql_repo.listar_itens_cardapio() == []
    assert sql_repo.obter_usuario("admin") is not None
