# app/core/database.py

import logging
import time

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from app.core.errors import PersistenceError

logger = logging.getLogger(__name__)

Base = declarative_base()

# Mesmo valor padrão do driver sqlite3 (timeout=5.0)
SQLITE_BUSY_TIMEOUT_MS = 5000
# Instruções da VM do SQLite entre cada checagem de prazo
SQLITE_PROGRESS_STEPS = 100


def _install_sqlite_deadline(engine: Engine) -> None:
    """
    Permite interromper um statement SQLite quando o prazo guardado em
    connection_record.info["deadline"] expira (inclusive o COMMIT).
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        def _expired() -> int:
            deadline = connection_record.info.get("deadline")
            return int(deadline is not None and time.monotonic() >= deadline)

        dbapi_connection.set_progress_handler(_expired, SQLITE_PROGRESS_STEPS)

    @event.listens_for(engine, "checkin")
    def _on_checkin(dbapi_connection, connection_record):
        # Prazo vale só para quem o definiu: limpa antes de voltar ao pool
        connection_record.info.pop("deadline", None)
        if connection_record.info.pop("busy_timeout_changed", False) and dbapi_connection is not None:
            dbapi_connection.execute(f"PRAGMA busy_timeout = {SQLITE_BUSY_TIMEOUT_MS}")


def make_engine(url: str) -> Engine:
    # Para SQLite, é importante usar connect_args={"check_same_thread": False}
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
            future=True,
        )
        _install_sqlite_deadline(engine)
        return engine

    return create_engine(url, echo=False, future=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Cria a tabela prices se ainda não existir. Pode ser chamada várias vezes."""
    # Importa os models para registrá-los no Base.metadata
    from app.models.price import Price  # noqa: F401

    Base.metadata.create_all(bind=engine)


def set_statement_deadline(db: Session, deadline: float) -> Connection:
    """
    Aplica um prazo absoluto (time.monotonic) aos próximos statements da
    sessão até a conexão voltar ao pool. Em SQLite também limita a espera
    por lock (busy_timeout) ao tempo restante.
    """
    conn = db.connection()
    if conn.dialect.name != "sqlite":
        # Outros bancos: só a checagem antes do COMMIT em save_price
        return conn

    remaining_ms = max(1, int((deadline - time.monotonic()) * 1000))
    conn.exec_driver_sql(f"PRAGMA busy_timeout = {remaining_ms}")
    conn.info["busy_timeout_changed"] = True
    conn.info["deadline"] = deadline
    return conn


def clear_statement_deadline(conn: Connection) -> None:
    # Necessário antes de um rollback, senão o próprio ROLLBACK seria interrompido
    conn.info.pop("deadline", None)


# Dependência por requisição: abre o banco, garante o schema e sempre fecha
def get_db(request: Request):
    engine = request.app.state.engine
    try:
        init_db(engine)
    except SQLAlchemyError as exc:
        logger.error("Falha ao abrir o banco %s: %s", engine.url, exc)
        raise PersistenceError("não foi possível preparar o banco") from exc

    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
