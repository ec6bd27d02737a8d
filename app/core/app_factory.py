# app/core/app_factory.py

import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response, status

from app.api.cotacao import router as cotacao_router
from app.core.config import Settings, settings as default_settings
from app.core.database import init_db, make_engine, make_session_factory
from app.core.errors import CotacaoError

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    upstream_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Monta a aplicação com estado explícito: engine, sessões, configuração
    e (opcionalmente) um cliente HTTP para a AwesomeAPI.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Cotação USD-BRL",
        version="0.1.0",
    )

    app.state.settings = settings
    app.state.engine = make_engine(settings.DATABASE_URL)
    app.state.session_factory = make_session_factory(app.state.engine)
    app.state.upstream_client = upstream_client

    @app.on_event("startup")
    def on_startup():
        logger.info("Banco em %s", settings.DATABASE_URL)
        init_db(app.state.engine)

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.engine.dispose()

    @app.exception_handler(CotacaoError)
    async def cotacao_error_handler(request: Request, exc: CotacaoError):
        logger.error("%s %s falhou: %s", request.method, request.url.path, exc, exc_info=exc)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    app.include_router(cotacao_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app
