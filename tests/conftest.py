"""Fixtures compartilhadas: payload da AwesomeAPI, configuração por teste e upstream falso."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.core.config import Settings
from app.core.database import init_db, make_engine, make_session_factory


@pytest.fixture
def usd_brl_payload() -> dict:
    """Resposta real (formato) de /json/last/USD-BRL."""
    return {
        "USDBRL": {
            "code": "USD",
            "codein": "BRL",
            "name": "Dólar Americano/Real Brasileiro",
            "high": "5.0210",
            "low": "4.9870",
            "varBid": "-0.0120",
            "pctChange": "-0.24",
            "bid": "5.00",
            "ask": "5.0010",
            "timestamp": "1718654400",
            "create_date": "2024-06-17 17:00:00",
        }
    }


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'sqlite.db'}",
        # folga para disco de CI; os testes de prazo definem o próprio valor
        PERSIST_TIMEOUT=1.0,
        OUTPUT_FILE=str(tmp_path / "cotacao.txt"),
        COTACAO_URL="http://testserver/cotacao",
    )


@pytest.fixture
def db_session(test_settings):
    engine = make_engine(test_settings.DATABASE_URL)
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _json_response(payload, status_code: int = 200, delay: float = 0.0):
    """Handler de MockTransport que responde `payload` após `delay` segundos."""
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if delay:
            await asyncio.sleep(delay)
        body = payload if isinstance(payload, (str, bytes)) else json.dumps(payload)
        return httpx.Response(status_code, content=body, headers={"Content-Type": "application/json"})

    handler.calls = calls
    return handler


@pytest.fixture
def json_handler():
    return _json_response


@pytest.fixture
def upstream_client_for():
    """Fábrica de httpx.AsyncClient apontando para um handler falso."""
    def _make(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
