from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.errors import InvalidArgumentError


@dataclass(frozen=True)
class AccountKey:
    """Composite identity of an account: card number plus PIN."""

    card_number: int
    pin: int

    def __post_init__(self) -> None:
        for label, value in (("card number", self.card_number), ("PIN", self.pin)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgumentError(
                    f"{label} must be a non-negative integer, got {value!r}"
                )


@dataclass(frozen=True)
class Account:
    holder_name: str
    balance: Decimal
