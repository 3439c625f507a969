"""
Inscrições para receber as cartas por email.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime

from ..database import Base
from ..config import SUBSCRIPTION_CONFIRMED_STATUS


class Subscription(Base):
    __tablename__ = "subscription_um_chamado"

    id = Column(Integer, primary_key=True, index=True)
    email_subscription = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    # Linhas antigas podem ter status nulo; só o valor confirmado conta como inscrição ativa
    status_subscription = Column(String(50), nullable=True, default=SUBSCRIPTION_CONFIRMED_STATUS)
