from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.auth_user import AuthUser
from ..services.account_service import find_profile, serialize_profile
from .auth import get_current_user

router = APIRouter(prefix="/user", tags=["user"])


@router.get("")
def get_me(auth_user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Perfil do usuário autenticado (sem o hash da senha).
    """
    return serialize_profile(auth_user, find_profile(db, auth_user))
