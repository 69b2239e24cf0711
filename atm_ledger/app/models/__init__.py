from .domain import Account, AccountKey
from .schemas import (
    AccountCreate,
    AccountResponse,
    BalanceResponse,
    LedgerFileResponse,
    MoneyMovementRequest,
    TransactionLogResponse,
)

__all__ = [
    "Account",
    "AccountKey",
    "AccountCreate",
    "AccountResponse",
    "BalanceResponse",
    "LedgerFileResponse",
    "MoneyMovementRequest",
    "TransactionLogResponse",
]
