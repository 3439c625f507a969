"""
Erros de domínio levantados pelos serviços e traduzidos para HTTP nos routers.
"""


class ServiceError(Exception):
    """Erro base dos serviços."""


class AccountAlreadyExists(ServiceError):
    pass


class InvalidCredentials(ServiceError):
    pass


class InvalidToken(ServiceError):
    pass


class CartaNotFound(ServiceError):
    pass
