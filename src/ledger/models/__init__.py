"""Database models."""
from ledger.models.user import User
from ledger.models.transaction import Transaction, TransactionType

__all__ = ["User", "Transaction", "TransactionType"]
