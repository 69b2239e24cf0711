from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Dict, List, Union

from ..core.errors import (
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientFundsError,
    InvalidAmountError,
)
from ..models import Account, AccountKey


logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, float, str]

LEDGER_SEPARATOR = "-" * 28

CENT = Decimal("0.01")


def to_decimal(value: Amount) -> Decimal:
    """Normalise a caller-supplied amount to ``Decimal``.

    Floats go through ``str`` so ``40.5`` becomes ``Decimal("40.5")`` rather
    than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be numeric, got {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(f"Amount must be numeric, got {value!r}") from exc


def to_cents(value: Amount) -> Decimal:
    """Convert to a finite ``Decimal`` rounded half-even to whole cents."""
    amount = to_decimal(value)
    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {amount}")
    try:
        return amount.quantize(CENT)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Amount is out of range, got {amount}") from exc


def format_currency(value: Decimal) -> str:
    return f"${value:.2f}"


class _TransactionLogView(Mapping):
    """Read-only live view over the per-account logs."""

    def __init__(self, logs: Dict[AccountKey, List[str]]) -> None:
        self._logs = logs

    def __getitem__(self, key: AccountKey) -> tuple[str, ...]:
        return tuple(self._logs[key])

    def __iter__(self) -> Iterator[AccountKey]:
        return iter(self._logs)

    def __len__(self) -> int:
        return len(self._logs)


class AccountLedger:
    def __init__(self) -> None:
        self._accounts: Dict[AccountKey, Account] = {}
        self._transactions: Dict[AccountKey, List[str]] = {}

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _get_account(self, key: AccountKey) -> Account:
        try:
            return self._accounts[key]
        except KeyError as exc:
            raise AccountNotFoundError(
                f"Account for card {key.card_number} not found"
            ) from exc

    def _positive_amount(self, amount: Amount) -> Decimal:
        value = to_cents(amount)
        if value <= 0:
            raise InvalidAmountError(f"Amount must be positive, got {value}")
        return value

    def _commit(self, key: AccountKey, account: Account, entry: str) -> None:
        self._accounts[key] = account
        self._transactions[key].append(entry)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def accounts(self) -> Mapping[AccountKey, Account]:
        return MappingProxyType(self._accounts)

    @property
    def transactions(self) -> Mapping[AccountKey, tuple[str, ...]]:
        return _TransactionLogView(self._transactions)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def register_account(
        self,
        card_number: int,
        pin: int,
        holder_name: str,
        initial_balance: Amount,
    ) -> Account:
        key = AccountKey(card_number, pin)
        if key in self._accounts:
            raise DuplicateAccountError(
                f"Account for card {card_number} is already registered"
            )

        account = Account(holder_name=holder_name, balance=to_cents(initial_balance))
        self._accounts[key] = account
        self._transactions[key] = []
        logger.info(
            "account.registered",
            extra={"card_number": card_number, "holder_name": holder_name},
        )
        return account

    def check_balance(self, card_number: int, pin: int) -> Decimal:
        return self._get_account(AccountKey(card_number, pin)).balance

    def withdraw_cash(self, card_number: int, pin: int, amount: Amount) -> Decimal:
        value = self._positive_amount(amount)
        key = AccountKey(card_number, pin)
        account = self._get_account(key)
        if value > account.balance:
            logger.warning(
                "account.withdraw.rejected",
                extra={"card_number": card_number, "amount": value},
            )
            raise InsufficientFundsError("Insufficient funds for withdrawal")

        updated = replace(account, balance=account.balance - value)
        entry = (
            f"Withdrawal - Amount: {format_currency(value)}, "
            f"Updated Balance: {format_currency(updated.balance)}"
        )
        self._commit(key, updated, entry)
        logger.info(
            "account.withdraw",
            extra={"card_number": card_number, "amount": value, "balance": updated.balance},
        )
        return updated.balance

    def deposit_cash(self, card_number: int, pin: int, amount: Amount) -> Decimal:
        value = self._positive_amount(amount)
        key = AccountKey(card_number, pin)
        account = self._get_account(key)

        updated = replace(account, balance=account.balance + value)
        entry = (
            f"Deposit - Amount: {format_currency(value)}, "
            f"Updated Balance: {format_currency(updated.balance)}"
        )
        self._commit(key, updated, entry)
        logger.info(
            "account.deposit",
            extra={"card_number": card_number, "amount": value, "balance": updated.balance},
        )
        return updated.balance

    def render_ledger(self, card_number: int, pin: int) -> str:
        key = AccountKey(card_number, pin)
        account = self._get_account(key)
        lines = [
            f"Name: {account.holder_name}",
            f"Card Number: {card_number}",
            f"PIN: {pin}",
            LEDGER_SEPARATOR,
            *self._transactions[key],
        ]
        return "".join(f"{line}\n" for line in lines)

    def print_ledger(
        self,
        destination: Union[str, os.PathLike],
        card_number: int,
        pin: int,
    ) -> None:
        # Rendering first keeps an unknown account from touching the file.
        text = self.render_ledger(card_number, pin)
        with open(destination, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        logger.info(
            "ledger.printed",
            extra={"card_number": card_number, "destination": os.fspath(destination)},
        )
