"""
Inscrições para receber as cartas por email.

A unicidade por email é garantida pela constraint da tabela: o insert é tentado
uma única vez e, se outra requisição inseriu o mesmo email antes, a linha
existente é devolvida.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import SUBSCRIPTION_CONFIRMED_STATUS
from ..models.subscription import Subscription
from ..utils import normalize_email

logger = logging.getLogger(__name__)

OUTCOME_ALREADY = "already"
OUTCOME_UPDATED = "updated"
OUTCOME_CREATED = "created"


def check_subscription(db: Session, email: str) -> Optional[Subscription]:
    return db.query(Subscription).filter(
        Subscription.email_subscription == normalize_email(email)
    ).first()


def create_subscription(db: Session, email: str) -> Tuple[Subscription, bool]:
    """Cria a inscrição. Retorna (inscrição, criada)."""
    email = normalize_email(email)
    subscription = Subscription(
        email_subscription=email,
        created_at=datetime.utcnow(),
        status_subscription=SUBSCRIPTION_CONFIRMED_STATUS,
    )
    db.add(subscription)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = check_subscription(db, email)
        if existing is None:
            raise
        logger.info(f"Inscrição para {email} criada por outra requisição")
        return existing, False

    db.refresh(subscription)
    logger.info(f"Inscrição criada: {email}")
    return subscription, True


def confirm_subscription(db: Session, email: str) -> Tuple[Subscription, str]:
    """
    Garante uma inscrição com status confirmado.

    Retorna a inscrição e o resultado: "already" (já confirmada),
    "updated" (existia com outro status) ou "created".
    """
    existing = check_subscription(db, email)

    if existing is not None:
        if existing.status_subscription == SUBSCRIPTION_CONFIRMED_STATUS:
            return existing, OUTCOME_ALREADY

        logger.info(f"Atualizando status da inscrição de {existing.email_subscription}")
        existing.status_subscription = SUBSCRIPTION_CONFIRMED_STATUS
        db.commit()
        db.refresh(existing)
        return existing, OUTCOME_UPDATED

    subscription, created = create_subscription(db, email)
    if not created and subscription.status_subscription != SUBSCRIPTION_CONFIRMED_STATUS:
        subscription.status_subscription = SUBSCRIPTION_CONFIRMED_STATUS
        db.commit()
        db.refresh(subscription)
        return subscription, OUTCOME_UPDATED
    return subscription, OUTCOME_CREATED if created else OUTCOME_ALREADY


def subscription_status(subscription: Optional[Subscription]) -> dict:
    if subscription is None:
        return {
            "isSubscribed": False,
            "hasSubscriptionStatus": False,
        }

    has_status_field = subscription.status_subscription is not None
    return {
        "isSubscribed": True,
        "hasSubscriptionStatus": subscription.status_subscription == SUBSCRIPTION_CONFIRMED_STATUS,
        "statusField": has_status_field,
        "statusValue": subscription.status_subscription,
    }


def count_subscriptions(db: Session) -> int:
    return db.query(Subscription).count()
