from .ledger import AccountLedger, format_currency, to_cents, to_decimal

__all__ = ["AccountLedger", "format_currency", "to_cents", "to_decimal"]
