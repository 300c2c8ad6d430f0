import os
from pathlib import Path


def _default_db_dir() -> Path:
    # O banco fica fora do repositório por padrão; COMANDAZAP_DB_DIR sobrescreve.
    configured = os.environ.get("COMANDAZAP_DB_DIR")
    if configured:
        return Path(configured)
    return Path.home() / ".comandazap"


def db_path() -> Path:
    configured = os.environ.get("COMANDAZAP_DB_PATH")
    if configured:
        return Path(configured)
    return _default_db_dir() / os.environ.get("COMANDAZAP_DB_NAME", "comandazap.db")


def database_url() -> str:
    return f"sqlite:///{db_path()}"


ESTABELECIMENTO = os.environ.get("COMANDAZAP_ESTABELECIMENTO", "ComandaZap")
ENDERECO = os.environ.get("COMANDAZAP_ENDERECO", "Rua Fictícia, 123 - Bairro Imaginário")
CNPJ = os.environ.get("COMANDAZAP_CNPJ", "00.000.000/0001-00")
FUSO_HORARIO = os.environ.get("COMANDAZAP_FUSO", "America/Sao_Paulo")


def cabecalho_recibo() -> list[str]:
    return [ESTABELECIMENTO, ENDERECO, f"CNPJ: {CNPJ}"]


__all__ = ["db_path", "database_url", "cabecalho_recibo", "FUSO_HORARIO"]
