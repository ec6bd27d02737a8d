# app/core/errors.py


class CotacaoError(Exception):
    """Falha terminal de uma requisição /cotacao (vira 500 sem corpo)."""


class UpstreamQuoteError(CotacaoError):
    """Erro de rede, status != 200, JSON inválido ou timeout na AwesomeAPI."""


class PersistenceError(CotacaoError):
    """Erro ao abrir o banco, criar a tabela ou gravar a cotação."""
