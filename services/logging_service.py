import logging
from datetime import datetime
from typing import Optional

from models import LogEntry
from repositories.base import Repositorio

logger = logging.getLogger("comandazap")


def registrar(repo: Repositorio, acao: str, usuario: Optional[str], detalhes: str) -> LogEntry:
    entrada = repo.registrar_log(
        LogEntry(id=None, acao=acao, detalhes=detalhes, usuario=usuario, criado_em=datetime.now())
    )
    logger.info("%s [%s] %s", acao, usuario or "-", detalhes)
    return entrada


def listar(repo: Repositorio, limit: int = 100):
    return repo.listar_logs(limit)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Configura a saída do logger ``comandazap`` no console e, opcionalmente, em arquivo."""
    level_num = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logger.setLevel(level_num)
    logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    if log_file:
        arquivo = logging.FileHandler(log_file)
        arquivo.setFormatter(formatter)
        logger.addHandler(arquivo)
    return logger


__all__ = ["registrar", "listar", "setup_logging"]
