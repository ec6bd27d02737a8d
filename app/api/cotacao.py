from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.database import get_db
from app.schemas.quote import DollarPrice
from app.services.exchange import fetch_usd_brl_quote
from app.services.prices import save_price

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cotacao"])


@router.get("/cotacao", response_model=DollarPrice)
async def get_cotacao(request: Request, db: Session = Depends(get_db)) -> DollarPrice:
    """
    1) banco aberto e tabela garantida (get_db)
    2) busca na AwesomeAPI com prazo próprio
    3) grava a cotação completa com prazo próprio
    4) devolve só o bid
    Qualquer falha sobe como CotacaoError e vira 500 sem corpo.
    """
    settings = request.app.state.settings

    quote = await fetch_usd_brl_quote(
        request.app.state.upstream_client,
        url=settings.USD_BRL_URL,
        timeout=settings.UPSTREAM_TIMEOUT,
    )
    logger.info("Cotação recebida: %s/%s bid=%s", quote.code, quote.codein, quote.bid)

    await run_in_threadpool(save_price, db, quote, settings.PERSIST_TIMEOUT)

    return DollarPrice(bid=quote.bid)
