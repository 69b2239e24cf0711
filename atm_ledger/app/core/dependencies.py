from functools import lru_cache

from ..services import AccountLedger


@lru_cache()
def get_ledger() -> AccountLedger:
    return AccountLedger()
