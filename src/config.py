import os

# Valor gravado em status_subscription quando a inscrição está confirmada
SUBSCRIPTION_CONFIRMED_STATUS = "is_subscription_um_chamado"


class Settings:
    """Configuração da aplicação que lê variáveis de ambiente dinamicamente."""

    @property
    def app_name(self) -> str:
        return "Um Chamado à Edificação"

    @property
    def environment(self) -> str:
        env = os.getenv("ENV", "").lower()
        if env == "production" or os.getenv("VERCEL_ENV", "").lower() == "production":
            return "production"
        return "development"

    @property
    def cors_origin(self) -> str:
        return os.getenv("CORS_ORIGIN", "http://localhost:5173")

    @property
    def database_url(self) -> str:
        return os.getenv("DATABASE_URL", "").strip()

    @property
    def jwt_secret_key(self) -> str:
        return os.getenv("JWT_SECRET_KEY", "chamado-edificacao-dev-secret")

    @property
    def jwt_access_token_expires_minutes(self) -> int:
        return int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_MINUTES", "60"))

    @property
    def jwt_refresh_token_expires_days(self) -> int:
        return int(os.getenv("JWT_REFRESH_TOKEN_EXPIRES_DAYS", "7"))

    @property
    def site_url(self) -> str:
        return os.getenv("SITE_URL", "http://localhost:5173")


_settings_instance = None


def get_settings() -> Settings:
    """Retorna a instância de Settings. Lê variáveis de ambiente dinamicamente."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def clear_settings_cache():
    global _settings_instance
    _settings_instance = None
