"""Engine e sessões SQLAlchemy.

Uso
---
banco = BancoDados("sqlite:///cnab80.db")
with banco.sessao() as s:
    s.execute(...)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from . import config


class Base(DeclarativeBase):
    pass


def _ativar_fk_sqlite(dbapi_conn, _):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class BancoDados:
    def __init__(self, url: str | None = None):
        self.url = url or config.DATABASE_URL
        self.engine: Engine = create_engine(self.url, pool_pre_ping=True)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _ativar_fk_sqlite)
        self._fabrica = sessionmaker(bind=self.engine, expire_on_commit=False, class_=Session)

    def criar_tabelas(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def sessao(self) -> Iterator[Session]:
        """Escopo transacional: commit no fim, rollback em qualquer exceção."""
        session = self._fabrica()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def fechar(self) -> None:
        self.engine.dispose()
