from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base


class Carta(Base):
    __tablename__ = "cartas_um_chamado_a_edificacao"

    id = Column(Integer, primary_key=True, index=True)
    id_sumary_carta = Column(Integer, unique=True, nullable=False, index=True)  # número exibido no site
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    leituras = relationship("StatusCarta", back_populates="carta", cascade="all, delete-orphan")


class StatusCarta(Base):
    __tablename__ = "status_carta"
    __table_args__ = (
        UniqueConstraint("carta_id", "account_user_id", name="uq_status_carta_carta_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    carta_id = Column(Integer, ForeignKey("cartas_um_chamado_a_edificacao.id"), nullable=False, index=True)
    account_user_id = Column(String(36), nullable=False, index=True)
    status = Column(String(20), default="lido", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    carta = relationship("Carta", back_populates="leituras")
