from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.errors import UpstreamQuoteError
from app.schemas.quote import EconomiaUSDBRL, Quote

logger = logging.getLogger(__name__)

USD_BRL_URL = "https://economia.awesomeapi.com.br/json/last/USD-BRL"
DEFAULT_TIMEOUT = 0.2


async def _get_quote(client: httpx.AsyncClient, url: str) -> Quote:
    r = await client.get(url)
    if r.status_code != 200:
        raise UpstreamQuoteError(f"AwesomeAPI respondeu {r.status_code}")
    data = EconomiaUSDBRL.model_validate_json(r.content)
    return data.usdbrl  # bid continua string tipo "5.2345"


async def fetch_usd_brl_quote(
    client: Optional[httpx.AsyncClient] = None,
    *,
    url: str = USD_BRL_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> Quote:
    """
    Busca a última cotação USD-BRL com prazo total de `timeout` segundos
    (conexão + resposta + leitura do corpo). Qualquer falha vira UpstreamQuoteError.
    """
    try:
        if client is not None:
            return await asyncio.wait_for(_get_quote(client, url), timeout)

        async with httpx.AsyncClient(timeout=timeout) as own_client:
            return await asyncio.wait_for(_get_quote(own_client, url), timeout)
    except UpstreamQuoteError:
        raise
    except asyncio.TimeoutError as exc:
        raise UpstreamQuoteError(f"AwesomeAPI excedeu {timeout * 1000:.0f}ms") from exc
    except httpx.HTTPError as exc:
        raise UpstreamQuoteError(f"Erro de rede na AwesomeAPI: {exc}") from exc
    except ValidationError as exc:
        raise UpstreamQuoteError(f"Resposta inválida da AwesomeAPI: {exc.error_count()} erro(s)") from exc
