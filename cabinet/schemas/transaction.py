from datetime import date as date_type, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.periods import local_now
from ..models.transaction import TransactionType, PaymentMethod


class Transaction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: TransactionType
    category: str
    method: PaymentMethod
    amount: float
    date: datetime


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=255)
    method: PaymentMethod = PaymentMethod.CARD
    date: date_type = Field(default_factory=lambda: local_now().date())

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category must not be blank")
        return v
