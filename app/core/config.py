# app/core/config.py

import os
from dotenv import load_dotenv

# Caminho da raiz do projeto (onde está o main.py e o .env)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
ENV_PATH = os.path.join(BASE_DIR, ".env")

# Carrega variáveis do arquivo .env, se existir
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)


def _ms(name: str, default: int) -> float:
    """Lê um timeout em milissegundos e devolve em segundos."""
    return int(os.getenv(name, str(default))) / 1000


class Settings:
    def __init__(self, **overrides) -> None:
        # SQLite local por padrão, mesmo arquivo que o servidor sempre usou
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./sqlite.db")

        # Upstream (AwesomeAPI)
        self.USD_BRL_URL: str = os.getenv(
            "USD_BRL_URL",
            "https://economia.awesomeapi.com.br/json/last/USD-BRL",
        )
        self.UPSTREAM_TIMEOUT: float = _ms("UPSTREAM_TIMEOUT_MS", 200)

        # 10ms herdado da versão original; apertado demais para disco lento
        self.PERSIST_TIMEOUT: float = _ms("PERSIST_TIMEOUT_MS", 10)

        # Servidor
        self.SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
        self.SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8080"))

        # Cliente
        self.COTACAO_URL: str = os.getenv("COTACAO_URL", "http://localhost:8080/cotacao")
        self.CLIENT_TIMEOUT: float = _ms("CLIENT_TIMEOUT_MS", 300)
        self.OUTPUT_FILE: str = os.getenv("OUTPUT_FILE", "cotacao.txt")

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Configuração desconhecida: {key}")
            setattr(self, key, value)


settings = Settings()
