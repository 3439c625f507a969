"""
API Router para inscrições nas cartas por email.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.subscription_schema import StatusCheckRequest, SubscribeRequest, SubscriptionOut
from ..services.account_service import get_auth_user_by_email
from ..services.email_service import send_subscription_welcome_email
from ..services.subscription_service import (
    OUTCOME_ALREADY,
    OUTCOME_CREATED,
    check_subscription,
    confirm_subscription,
    count_subscriptions,
    create_subscription,
    subscription_status,
)
from ..utils import looks_like_email, normalize_email

logger = logging.getLogger(__name__)
router = APIRouter(tags=["subscriptions"])


def _out(subscription) -> Optional[dict]:
    if subscription is None:
        return None
    return SubscriptionOut.model_validate(subscription).model_dump(mode="json")


@router.post("/subscribe")
async def subscribe(request: SubscribeRequest, response: Response, db: Session = Depends(get_db)):
    """
    Inscrição pela página inicial.
    Garante a inscrição e indica se o visitante deve ir para o login ou para o cadastro.
    """
    email = normalize_email(request.email)
    logger.info(f"Processando inscrição para o email: {email}")

    user_exists = get_auth_user_by_email(db, email) is not None
    subscription = check_subscription(db, email)
    subscription_exists = subscription is not None

    created = False
    if subscription is None:
        subscription, created = create_subscription(db, email)
        # Outra requisição criou a inscrição entre a consulta e o insert
        subscription_exists = not created
    if created:
        await send_subscription_welcome_email(email)

    if user_exists:
        redirect = "login"
        if subscription_exists:
            message = "Você já está inscrito e tem uma conta ativa"
        else:
            message = "Inscrição realizada com sucesso para conta existente"
    else:
        redirect = "register"
        if subscription_exists:
            message = "Você já está inscrito, mas não tem uma conta"
        else:
            message = "Inscrição realizada com sucesso"

    response.status_code = status.HTTP_201_CREATED if created and not user_exists else status.HTTP_200_OK
    return {
        "success": True,
        "message": message,
        "email": email,
        "userExists": user_exists,
        "subscriptionExists": subscription_exists,
        "subscription": _out(subscription),
        "redirect": redirect,
    }


@router.post("/dashboard-subscribe")
async def dashboard_subscribe(request: SubscribeRequest, response: Response, db: Session = Depends(get_db)):
    """
    Inscrição feita por um leitor logado, a partir do painel.
    """
    subscription, outcome = confirm_subscription(db, request.email)

    if outcome == OUTCOME_ALREADY:
        message = "Você já está inscrito para receber as cartas por email"
    elif outcome == OUTCOME_CREATED:
        message = "Inscrição realizada com sucesso! Você agora receberá as cartas por email"
        await send_subscription_welcome_email(subscription.email_subscription)
    else:
        message = "Sua inscrição foi atualizada com sucesso!"

    response.status_code = status.HTTP_201_CREATED if outcome == OUTCOME_CREATED else status.HTTP_200_OK
    return {
        "success": True,
        "message": message,
        "subscription": _out(subscription),
    }


@router.post("/check-subscription-status")
def check_subscription_status(request: StatusCheckRequest, db: Session = Depends(get_db)):
    if not looks_like_email(request.email):
        logger.warning(f"Email inválido para verificação de status: {request.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"success": False, "message": "Email inválido. Por favor, forneça um email válido"},
        )

    subscription = check_subscription(db, request.email)
    result = subscription_status(subscription)

    if subscription is None:
        message = "Usuário não inscrito"
    elif result["hasSubscriptionStatus"]:
        message = "Usuário inscrito com status confirmado"
    else:
        message = "Usuário inscrito sem status confirmado"

    return {"success": True, "message": message, **result}


@router.get("/check-subscription")
def check_subscription_by_query(
    email: Optional[str] = Query(default=None, description="Email a verificar"),
    db: Session = Depends(get_db),
):
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Email é obrigatório", "isSubscribed": False},
        )

    subscription = check_subscription(db, email)
    return {"isSubscribed": subscription is not None, "subscription": _out(subscription)}


@router.get("/subscriptions/count")
def get_subscriptions_count(db: Session = Depends(get_db)):
    return {"count": count_subscriptions(db)}
