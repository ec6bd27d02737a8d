from __future__ import annotations

import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import clear_statement_deadline, set_statement_deadline
from app.core.errors import PersistenceError
from app.models.price import Price
from app.schemas.quote import Quote

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 0.01


def save_price(db: Session, quote: Quote, timeout: float = DEFAULT_TIMEOUT) -> Price:
    """
    Grava a cotação inteira como uma nova linha em prices, com prazo total
    de `timeout` segundos (INSERT + COMMIT). Em caso de falha faz rollback
    e levanta PersistenceError; nada fica gravado.
    """
    deadline = time.monotonic() + timeout
    price = Price(**quote.model_dump())
    conn = None

    try:
        conn = set_statement_deadline(db, deadline)
        db.add(price)
        db.flush()
        price_id = price.id
        if time.monotonic() >= deadline:
            raise PersistenceError(f"INSERT excedeu {timeout * 1000:.0f}ms")
        db.commit()
    except (SQLAlchemyError, PersistenceError) as exc:
        if conn is not None:
            clear_statement_deadline(conn)
        db.rollback()
        if isinstance(exc, PersistenceError):
            raise
        raise PersistenceError(f"Falha ao gravar cotação: {exc}") from exc

    logger.info("Cotação gravada em prices (id=%s, bid=%s)", price_id, quote.bid)
    return price


def count_prices(db: Session) -> int:
    return db.query(Price).count()


def latest_price(db: Session) -> Price | None:
    return db.query(Price).order_by(Price.id.desc()).first()
