from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal

TransactionType = Literal["Income", "Expense"]


# =========================
# Base
# =========================
class TransactionBase(BaseModel):
    amount: float = Field(allow_inf_nan=False)
    title: str = ""
    date: datetime
    method: str = ""             # Cash / Card / Transfer
    category: str = ""
    type: TransactionType


# =========================
# Create
# =========================
class TransactionCreate(TransactionBase):
    pass  # owner comes from the token, any userId in the body is ignored


# =========================
# Update
# =========================
class TransactionUpdate(BaseModel):
    # method and category are intentionally absent: PUT leaves them as stored
    title: str
    amount: float = Field(allow_inf_nan=False)
    type: TransactionType
    date: datetime


# =========================
# Output
# =========================
class TransactionOut(TransactionBase):
    id: int
    user_id: int = Field(serialization_alias="userId")

    class Config:
        from_attributes = True


class SummaryOut(BaseModel):
    income: float
    expense: float
    balance: float


class MessageOut(BaseModel):
    message: str
