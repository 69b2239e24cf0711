from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, Field

class AccountCreate(BaseModel):
    card_number: int = Field(..., ge=0, description="Card number printed on the card")
    pin: int = Field(..., ge=0, description="Personal identification number")
    holder_name: str = Field(..., min_length=1, description="Name of the account holder")
    initial_balance: Decimal = Field(default=Decimal("0"), ge=0)

class AccountResponse(BaseModel):
    card_number: int
    holder_name: str
    balance: Decimal

class BalanceResponse(BaseModel):
    card_number: int
    balance: Decimal

class MoneyMovementRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, description="Amount in currency units (must be > 0)")

class TransactionLogResponse(BaseModel):
    card_number: int
    items: list[str]

class LedgerFileResponse(BaseModel):
    card_number: int
    path: Path
