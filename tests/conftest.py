import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import CategoriaCardapio, ItemCardapio  # noqa: E402
from repositories.memoria import MemoryRepository  # noqa: E402


@pytest.fixture(autouse=True)
def temp_db_path(tmp_path):
    """Garante que cada teste use um banco isolado fora do repositório."""
    db_path = tmp_path / "comandazap.db"
    os.environ["COMANDAZAP_DB_PATH"] = str(db_path)
    yield db_path
    os.environ.pop("COMANDAZAP_DB_PATH", None)


@pytest.fixture
def repo():
    return MemoryRepository()


@pytest.fixture
def cardapio(repo):
    """Itens básicos do cardápio salvos no repositório, por nome."""
    itens = {
        "hamburguer": ItemCardapio(id=None, nome="Hambúrguer", preco=20.0, categoria=CategoriaCardapio.LANCHES),
        "batata": ItemCardapio(id=None, nome="Batata", preco=12.0, categoria=CategoriaCardapio.PORCOES),
        "refri": ItemCardapio(
            id=None, nome="Refrigerante", preco=5.5, categoria=CategoriaCardapio.AGUA_REFRIGERANTE
        ),
    }
    for item in itens.values():
        repo.salvar_item_cardapio(item)
    return itens
