from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.enums import TransactionType

class CategoryCreate(BaseModel):
    name: str
    type: TransactionType
    icon_name: str = "questionmark.circle"
    color_hex: str = "0000FF"

class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[TransactionType] = None
    icon_name: Optional[str] = None
    color_hex: Optional[str] = None

class CategoryRead(BaseModel):
    id: int
    name: str
    type: TransactionType
    icon_name: str
    color_hex: str

    model_config = ConfigDict(from_attributes=True)
