import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.auth_user import AuthUser
from ..schemas.auth_schema import (
    AccountUserOut,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
)
from ..services.account_service import (
    authenticate,
    find_profile,
    get_auth_user,
    register_account,
    serialize_profile,
)
from ..services.exceptions import AccountAlreadyExists, InvalidCredentials, InvalidToken
from ..services.security import REFRESH_TOKEN, create_session, decode_token

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Não autenticado") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[AuthUser]:
    """Usuário do token Bearer, ou None quando a requisição não traz token."""
    if credentials is None:
        return None
    try:
        payload = decode_token(credentials.credentials)
    except InvalidToken as e:
        logger.warning(f"Token rejeitado: {e}")
        raise _unauthorized()

    auth_user = get_auth_user(db, payload["sub"])
    if auth_user is None:
        raise _unauthorized()
    return auth_user


def get_current_user(auth_user: Optional[AuthUser] = Depends(get_optional_user)) -> AuthUser:
    if auth_user is None:
        raise _unauthorized()
    return auth_user


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Cria a identidade de autenticação e o perfil em account_user.
    """
    logger.info(f"Processando registro para o email: {payload.email}")
    try:
        auth_user, profile = register_account(db, payload.email, payload.password, payload.name)
    except AccountAlreadyExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return RegisterResponse(
        message="Usuário criado com sucesso",
        userId=auth_user.id,
        email=auth_user.email,
        name=profile.name,
        accountUser=AccountUserOut.model_validate(profile),
    )


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    try:
        auth_user = authenticate(db, payload.email, payload.password)
    except InvalidCredentials as e:
        logger.warning(f"Login recusado para {payload.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    profile = find_profile(db, auth_user)
    if profile is None:
        logger.info(f"Login autenticado para {auth_user.email}, mas sem perfil completo encontrado")

    return {
        "message": "Login realizado com sucesso",
        "user": serialize_profile(auth_user, profile),
        "session": create_session(auth_user),
    }


@router.post("/refresh")
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)):
    try:
        claims = decode_token(payload.refresh_token, expected_type=REFRESH_TOKEN)
    except InvalidToken as e:
        raise _unauthorized(str(e))

    auth_user = get_auth_user(db, claims["sub"])
    if auth_user is None:
        raise _unauthorized()
    return {"session": create_session(auth_user)}
