"""
Cliente da cotação: uma única chamada a GET /cotacao e grava o bid em arquivo.
Qualquer falha (conexão, prazo, status, JSON) encerra o processo com traceback
sem tocar no arquivo de saída.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import httpx

from app.core.config import Settings, settings as default_settings
from app.core.logging_config import configure_logging
from app.schemas.quote import DollarPrice

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "Dólar: "


async def _get_bid(client: httpx.AsyncClient, url: str) -> str:
    r = await client.get(url)
    r.raise_for_status()
    return DollarPrice.model_validate_json(r.content).bid


async def fetch_bid(
    url: str,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    # wait_for cobre o tempo total; o timeout do httpx é por fase
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        return await asyncio.wait_for(_get_bid(client, url), timeout)


def write_quote_file(path: str | Path, bid: str) -> Path:
    path = Path(path)
    path.write_text(f"{OUTPUT_PREFIX}{bid}", encoding="utf-8")
    return path


async def run(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Path:
    settings = settings or default_settings
    bid = await fetch_bid(settings.COTACAO_URL, settings.CLIENT_TIMEOUT, transport)
    path = write_quote_file(settings.OUTPUT_FILE, bid)
    logger.info("Bid %s gravado em %s", bid, path)
    return path


def main():
    configure_logging(default_settings.LOG_LEVEL)
    asyncio.run(run())


if __name__ == "__main__":
    main()
