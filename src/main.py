import os
import sys
import time
import logging
from datetime import datetime, timezone
from pathlib import Path
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy import inspect, text
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routers import auth, cartas, subscriptions, user
from .config import get_settings, clear_settings_cache
from .database import Base, SessionLocal, engine, fix_sequences
from .services.email_service import get_email_config_info

# Configurar logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Carregar variáveis de ambiente do .env (apenas em desenvolvimento local)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
if load_dotenv(dotenv_path=env_path):
    logger.info(f"Variáveis de ambiente carregadas de: {env_path}")

clear_settings_cache()

# Importar todos os modelos para que o SQLAlchemy os registre antes do create_all()
from .models.auth_user import AuthUser  # noqa: F401,E402
from .models.account_user import AccountUser  # noqa: F401,E402
from .models.subscription import Subscription  # noqa: F401,E402
from .models.carta import Carta, StatusCarta  # noqa: F401,E402

app_settings = get_settings()

app = FastAPI(title="Um Chamado à Edificação API", version="0.1.0", redirect_slashes=False)

# Configurar CORS
allowed_origins = [
    "http://localhost:5173",
    "http://localhost:3000",
]

cors_origin_env = os.getenv("CORS_ORIGIN", "")
for origin in (o.strip() for o in cors_origin_env.split(",")):
    if origin and origin not in allowed_origins:
        allowed_origins.append(origin)

if app_settings.environment == "production" and not cors_origin_env:
    logger.warning("CORS_ORIGIN não configurado em produção, permitindo todas as origens")
    allowed_origins = ["*"]

logger.info(f"Origens CORS permitidas: {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Erros HTTP saem como {"message": ...}, o formato que o frontend lê."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    fields = [str(err["loc"][-1]) for err in errors if err.get("loc")]
    logger.warning(f"Requisição inválida em {request.url.path}: {fields}")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Dados da requisição inválidos",
            "fields": fields,
            "details": errors,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Erro inesperado em {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Erro interno do servidor", "details": str(exc)},
    )


def create_tables():
    """Cria as tabelas no banco se não existirem."""
    expected_tables = list(Base.metadata.tables.keys())
    logger.info(f"Tabelas esperadas: {', '.join(expected_tables)}")

    Base.metadata.create_all(bind=engine)

    existing_tables = inspect(engine).get_table_names()
    missing_tables = [t for t in expected_tables if t not in existing_tables]
    if missing_tables:
        logger.warning(f"Tabelas faltantes: {', '.join(missing_tables)}")
    else:
        logger.info("Todas as tabelas foram criadas/verificadas")


# Criar tabelas ao iniciar (não bloqueia o início se falhar)
try:
    create_tables()
    fix_sequences()
except Exception as e:
    logger.error(f"Erro ao criar tabelas ao iniciar: {str(e)}", exc_info=True)
    logger.warning("O servidor continuará iniciando, mas algumas funcionalidades podem não estar disponíveis")

# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(user.router, prefix="/api")
app.include_router(subscriptions.router, prefix="/api")
app.include_router(cartas.router, prefix="/api")


@app.get("/", tags=["root"])
async def root():
    return {"message": "Bem-vindo à API do Um Chamado à Edificação"}


@app.get("/api/healthcheck", tags=["health"])
async def healthcheck():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python": sys.version.split()[0],
        "environment": app_settings.environment,
        "database": {"engine": engine.dialect.name},
        "email": get_email_config_info(),
    }


@app.get("/api/database-status", tags=["health"])
def database_status():
    """Testa a conexão com o banco com uma consulta simples."""
    db = SessionLocal()
    start = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
        subscriptions_count = db.query(Subscription).count()
        cartas_count = db.query(Carta).count()
    except Exception as e:
        logger.error(f"Erro ao conectar com o banco: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Erro ao conectar com o banco de dados",
                "details": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    finally:
        db.close()

    response_time = (time.perf_counter() - start) * 1000
    return {
        "status": "online",
        "message": "Conexão com o banco estabelecida com sucesso",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "responseTime": f"{response_time:.0f}ms",
        "counts": {"subscriptions": subscriptions_count, "cartas": cartas_count},
    }


@app.get("/favicon.ico", tags=["static"])
async def favicon():
    return Response(status_code=204)
