from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CartaOut(BaseModel):
    id: int
    id_sumary_carta: int
    title: str
    body: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LeituraRequest(BaseModel):
    cartaId: Optional[int] = None
    userId: Optional[str] = None
