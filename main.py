# main.py

import logging

import uvicorn

from app.core.app_factory import create_app
from app.core.config import settings
from app.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = create_app(settings)


def main():
    logger.info("Servidor de cotação em %s:%s", settings.SERVER_HOST, settings.SERVER_PORT)
    uvicorn.run(
        app,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
