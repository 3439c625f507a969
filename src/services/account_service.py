"""
Cadastro e autenticação de contas.

Cada conta tem duas linhas com o mesmo id: a identidade de autenticação
(auth_users) e o perfil exibido no site (account_user). O perfil pode já existir
antes do cadastro (importado de listas antigas), então o registro reconcilia
pelo email em vez de sempre inserir.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.account_user import AccountUser
from ..models.auth_user import AuthUser
from ..schemas.auth_schema import AccountUserOut
from ..utils import normalize_email
from .exceptions import AccountAlreadyExists, InvalidCredentials
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_auth_user_by_email(db: Session, email: str) -> Optional[AuthUser]:
    return db.query(AuthUser).filter(AuthUser.email == normalize_email(email)).first()


def get_auth_user(db: Session, user_id: str) -> Optional[AuthUser]:
    return db.query(AuthUser).filter(AuthUser.id == user_id).first()


def register_account(db: Session, email: str, password: str, name: str) -> Tuple[AuthUser, AccountUser]:
    email = normalize_email(email)
    name = name.strip()

    if get_auth_user_by_email(db, email):
        raise AccountAlreadyExists("Este email já está registrado")

    auth_user = AuthUser(
        id=str(uuid.uuid4()),
        email=email,
        hashed_password=hash_password(password),
        email_confirmed=True,
        user_metadata={"name": name},
    )
    db.add(auth_user)

    profile = db.query(AccountUser).filter(AccountUser.email == email).first()
    if profile:
        logger.info(f"Perfil existente encontrado para {email}, vinculando ao novo usuário")
        profile.id = auth_user.id
        profile.user_id = auth_user.id
        profile.name = name
        profile.status = "active"
        profile.updated_at = datetime.utcnow()
    else:
        profile = AccountUser(
            id=auth_user.id,
            user_id=auth_user.id,
            name=name,
            email=email,
            status="active",
        )
        db.add(profile)

    try:
        db.commit()
    except IntegrityError:
        # Outro cadastro para o mesmo email terminou primeiro
        db.rollback()
        raise AccountAlreadyExists("Este email já está registrado")

    db.refresh(auth_user)
    db.refresh(profile)
    logger.info(f"Usuário cadastrado: {email}, ID: {auth_user.id}")
    return auth_user, profile


def authenticate(db: Session, email: str, password: str) -> AuthUser:
    auth_user = get_auth_user_by_email(db, email)
    if not auth_user or not verify_password(password, auth_user.hashed_password):
        raise InvalidCredentials("Credenciais inválidas")

    auth_user.last_sign_in_at = datetime.utcnow()
    db.commit()
    db.refresh(auth_user)
    return auth_user


def find_profile(db: Session, auth_user: AuthUser) -> Optional[AccountUser]:
    """Busca o perfil pelo user_id e, se não houver, pelo email."""
    profile = db.query(AccountUser).filter(AccountUser.user_id == auth_user.id).first()
    if profile:
        return profile

    logger.info(f"Perfil não encontrado pelo user_id {auth_user.id}, buscando por email")
    return db.query(AccountUser).filter(AccountUser.email == auth_user.email).first()


def serialize_profile(auth_user: AuthUser, profile: Optional[AccountUser]) -> dict:
    if profile is not None:
        return AccountUserOut.model_validate(profile).model_dump(mode="json")

    return {
        "id": auth_user.id,
        "email": auth_user.email,
        "user_metadata": auth_user.user_metadata or {},
        "created_at": auth_user.created_at.isoformat() if auth_user.created_at else None,
    }
