"""
Identidade de autenticação (email + hash da senha).
O perfil exibido no site fica em account_user, com o mesmo id.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Boolean, JSON

from ..database import Base


class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    email_confirmed = Column(Boolean, default=True, nullable=False)
    user_metadata = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    last_sign_in_at = Column(DateTime, nullable=True)
