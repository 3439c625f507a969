from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class SubscribeRequest(BaseModel):
    email: EmailStr


class StatusCheckRequest(BaseModel):
    # Validado no endpoint para devolver a mensagem própria de email inválido
    email: Optional[str] = None


class SubscriptionOut(BaseModel):
    id: int
    email_subscription: str
    created_at: Optional[datetime] = None
    status_subscription: Optional[str] = None

    model_config = {"from_attributes": True}
