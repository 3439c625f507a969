from datetime import datetime

from sqlalchemy import Column, String, DateTime

from ..database import Base


class AccountUser(Base):
    __tablename__ = "account_user"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), index=True, nullable=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    status = Column(String(50), default="active")  # active, inactive
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)
