# Configuração do banco de dados usando SQLAlchemy.
#
# - PRODUÇÃO: Postgres hospedado (Supabase), via DATABASE_URL
# - DESENVOLVIMENTO LOCAL: SQLite local (chamado.db) quando DATABASE_URL não está definida
# - TESTES: DATABASE_URL=sqlite:// usa um banco em memória compartilhado

import logging
from pathlib import Path
from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from .config import get_settings

logger = logging.getLogger(__name__)

backend_dir = Path(__file__).parent.parent
load_dotenv(dotenv_path=backend_dir / ".env")

env_database_url = get_settings().database_url

IS_POSTGRES = bool(env_database_url) and not env_database_url.startswith("sqlite")

if env_database_url:
    DATABASE_URL = env_database_url
    # Supabase ainda entrega URLs com o esquema antigo "postgres://"
    if DATABASE_URL.startswith("postgres://"):
        DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)
else:
    DATABASE_URL = "sqlite:///./chamado.db"

engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs["pool_pre_ping"] = True

engine = create_engine(DATABASE_URL, **engine_kwargs)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def fix_sequences():
    """
    Sincroniza as sequências do Postgres com max(id)+1.

    Necessário quando as cartas são importadas com ids explícitos, o que deixa a
    sequência para trás e gera "duplicate key value violates unique constraint".
    """
    if not IS_POSTGRES:
        return

    tables_to_fix = ["subscription_um_chamado", "cartas_um_chamado_a_edificacao", "status_carta"]

    with engine.connect() as conn:
        for table in tables_to_fix:
            try:
                conn.execute(text(f"""
                    SELECT setval(
                        pg_get_serial_sequence('{table}', 'id'),
                        COALESCE((SELECT MAX(id) FROM {table}), 0) + 1,
                        false
                    )
                """))
                conn.commit()
                logger.info(f"Sequência de '{table}' sincronizada")
            except Exception as e:
                conn.rollback()
                logger.warning(f"Não foi possível sincronizar a sequência de '{table}': {e}")


def get_db():
    """
    Dependência que injeta a sessão do banco nos endpoints do FastAPI.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
