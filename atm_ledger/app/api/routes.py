from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import PlainTextResponse

from ..core.config import Settings, get_settings
from ..core.dependencies import get_ledger
from ..core.errors import AccountNotFoundError
from ..models import (
    AccountCreate,
    AccountKey,
    AccountResponse,
    BalanceResponse,
    LedgerFileResponse,
    MoneyMovementRequest,
    TransactionLogResponse,
)
from ..services import AccountLedger


router = APIRouter(prefix="/accounts", tags=["accounts"])

def require_account(ledger: AccountLedger, card_number: int, pin: int) -> AccountKey:
    key = AccountKey(card_number, pin)
    if key not in ledger.accounts:
        raise AccountNotFoundError(f"Account for card {card_number} not found")
    return key

def card_pin(pin: int = Header(..., ge=0, convert_underscores=False, alias="X-Card-PIN")) -> int:
    return pin

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def register_account(
    payload: AccountCreate,
    ledger: AccountLedger = Depends(get_ledger),
) -> AccountResponse:
    account = ledger.register_account(
        payload.card_number,
        payload.pin,
        payload.holder_name,
        payload.initial_balance,
    )
    return AccountResponse(
        card_number=payload.card_number,
        holder_name=account.holder_name,
        balance=account.balance,
    )

@router.get("/{card_number}/balance", response_model=BalanceResponse)
def check_balance(
    card_number: int,
    pin: int = Depends(card_pin),
    ledger: AccountLedger = Depends(get_ledger),
) -> BalanceResponse:
    balance = ledger.check_balance(card_number, pin)
    return BalanceResponse(card_number=card_number, balance=balance)

@router.post("/{card_number}/deposit", response_model=BalanceResponse)
def deposit_cash(
    card_number: int,
    payload: MoneyMovementRequest,
    pin: int = Depends(card_pin),
    ledger: AccountLedger = Depends(get_ledger),
) -> BalanceResponse:
    balance = ledger.deposit_cash(card_number, pin, payload.amount)
    return BalanceResponse(card_number=card_number, balance=balance)

@router.post("/{card_number}/withdraw", response_model=BalanceResponse)
def withdraw_cash(
    card_number: int,
    payload: MoneyMovementRequest,
    pin: int = Depends(card_pin),
    ledger: AccountLedger = Depends(get_ledger),
) -> BalanceResponse:
    balance = ledger.withdraw_cash(card_number, pin, payload.amount)
    return BalanceResponse(card_number=card_number, balance=balance)

@router.get("/{card_number}/transactions", response_model=TransactionLogResponse)
def list_transactions(
    card_number: int,
    pin: int = Depends(card_pin),
    ledger: AccountLedger = Depends(get_ledger),
) -> TransactionLogResponse:
    key = require_account(ledger, card_number, pin)
    return TransactionLogResponse(
        card_number=card_number, items=list(ledger.transactions[key])
    )

@router.get("/{card_number}/ledger", response_class=PlainTextResponse)
def render_ledger(
    card_number: int,
    pin: int = Depends(card_pin),
    ledger: AccountLedger = Depends(get_ledger),
) -> str:
    return ledger.render_ledger(card_number, pin)

@router.post(
    "/{card_number}/ledger",
    response_model=LedgerFileResponse,
    status_code=status.HTTP_201_CREATED,
)
def print_ledger(
    card_number: int,
    pin: int = Depends(card_pin),
    ledger: AccountLedger = Depends(get_ledger),
    settings: Settings = Depends(get_settings),
) -> LedgerFileResponse:
    require_account(ledger, card_number, pin)
    settings.ledger_dir.mkdir(parents=True, exist_ok=True)
    destination = settings.ledger_dir / f"ledger_{card_number}_{pin}.txt"
    ledger.print_ledger(destination, card_number, pin)
    return LedgerFileResponse(card_number=card_number, path=destination)

__all__ = ["router"]
