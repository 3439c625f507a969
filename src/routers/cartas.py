import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.auth_user import AuthUser
from ..schemas.carta_schema import CartaOut, LeituraRequest
from ..services.carta_service import get_carta, list_cartas, list_leituras, registrar_leitura
from ..services.exceptions import CartaNotFound
from .auth import get_optional_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cartas", tags=["cartas"])


@router.get("", response_model=List[CartaOut])
def get_cartas(db: Session = Depends(get_db)):
    cartas = list_cartas(db)
    logger.info(f"Encontradas {len(cartas)} cartas")
    return cartas


@router.get("/lidas")
def get_cartas_lidas(
    userId: Optional[str] = Query(default=None),
    auth_user: Optional[AuthUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """
    Números das cartas já lidas pelo usuário.
    Com token Bearer vale sempre o usuário do token; o userId da query só é usado sem token.
    """
    if auth_user is not None:
        if userId and userId != auth_user.id:
            logger.warning(f"userId {userId} ignorado, diferente do usuário do token {auth_user.id}")
        user_id = auth_user.id
    else:
        user_id = userId
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ID do usuário é obrigatório")
    return {"userId": user_id, "cartas": list_leituras(db, user_id)}


@router.post("/registrar-leitura")
def post_registrar_leitura(
    payload: LeituraRequest,
    auth_user: Optional[AuthUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    user_id = auth_user.id if auth_user is not None else payload.userId
    if not payload.cartaId or not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="ID da carta e ID do usuário são obrigatórios",
        )

    try:
        carta, created = registrar_leitura(db, payload.cartaId, user_id)
    except CartaNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    message = "Leitura registrada com sucesso" if created else "Leitura já registrada anteriormente"
    return {"message": message, "cartaId": carta.id}


@router.get("/{id_sumary_carta}", response_model=CartaOut)
def get_carta_by_id(id_sumary_carta: int, db: Session = Depends(get_db)):
    try:
        return get_carta(db, id_sumary_carta)
    except CartaNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
