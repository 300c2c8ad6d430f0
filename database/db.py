from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core import config

Base = declarative_base()


def criar_engine(database_url: Optional[str] = None) -> Engine:
    url = database_url or config.database_url()
    if url.startswith("sqlite:///"):
        Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=False)


def criar_fabrica_sessoes(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def criar_tabelas(engine: Engine) -> None:
    # importa as tabelas para registrá-las no metadata
    from database import tabelas  # noqa: F401

    Base.metadata.create_all(engine)


def reset_database(engine: Engine) -> None:
    from database import tabelas  # noqa: F401

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)


__all__ = ["Base", "criar_engine", "criar_fabrica_sessoes", "criar_tabelas", "reset_database"]
