# Importar todos os modelos para que o SQLAlchemy os registre
from .auth_user import AuthUser
from .account_user import AccountUser
from .subscription import Subscription
from .carta import Carta, StatusCarta

__all__ = [
    "AuthUser",
    "AccountUser",
    "Subscription",
    "Carta",
    "StatusCarta",
]
