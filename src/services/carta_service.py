import logging
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.carta import Carta, StatusCarta
from .exceptions import CartaNotFound

logger = logging.getLogger(__name__)

STATUS_LIDO = "lido"


def list_cartas(db: Session) -> List[Carta]:
    return db.query(Carta).order_by(Carta.id_sumary_carta.asc()).all()


def get_carta(db: Session, id_sumary_carta: int) -> Carta:
    """Busca a carta pelo número exibido no site (id_sumary_carta), não pelo id interno."""
    carta = db.query(Carta).filter(Carta.id_sumary_carta == id_sumary_carta).first()
    if carta is None:
        raise CartaNotFound("Carta não encontrada")
    return carta


def registrar_leitura(db: Session, id_sumary_carta: int, user_id: str) -> Tuple[Carta, bool]:
    """
    Marca a carta como lida pelo usuário.

    Retorna (carta, criada). Uma leitura repetida não é erro: devolve criada=False.
    """
    carta = get_carta(db, id_sumary_carta)

    already = db.query(StatusCarta).filter(
        StatusCarta.carta_id == carta.id,
        StatusCarta.account_user_id == user_id,
    ).first()
    if already:
        return carta, False

    db.add(StatusCarta(carta_id=carta.id, account_user_id=user_id, status=STATUS_LIDO))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return carta, False

    logger.info(f"Leitura registrada: carta {carta.id} (número {id_sumary_carta}) para o usuário {user_id}")
    return carta, True


def list_leituras(db: Session, user_id: str) -> List[int]:
    rows = (
        db.query(Carta.id_sumary_carta)
        .join(StatusCarta, StatusCarta.carta_id == Carta.id)
        .filter(StatusCarta.account_user_id == user_id, StatusCarta.status == STATUS_LIDO)
        .order_by(Carta.id_sumary_carta.asc())
        .all()
    )
    return [row[0] for row in rows]
