"""Transactions recorded inside a block."""

from __future__ import annotations

from dataclasses import dataclass

MAX_DATA_LENGTH = 256
MAX_TRANSACTIONS = 100
SENDER_LENGTH = 50

_UINT64 = (1 << 64) - 1


class InvalidTransactionError(ValueError):
    """Raised when a transaction lacks a sender, a timestamp or data."""


class TransactionLimitError(OverflowError):
    """Raised when a block already holds the maximum number of transactions."""


def _c_string(value: str, capacity: int) -> str:
    """Cut ``value`` to what fits a NUL-terminated buffer of ``capacity`` bytes."""
    text = value.split("\x00", 1)[0]
    return text.encode("utf-8")[: capacity - 1].decode("utf-8", errors="ignore")


@dataclass
class Transaction:
    sender: str
    timestamp: int
    data: str

    def is_valid(self) -> bool:
        return bool(self.sender) and self.timestamp > 0 and bool(self.data)


def add_transaction(
    transactions: list[Transaction], sender: str, timestamp: int, data: str
) -> Transaction:
    """Append a transaction to ``transactions`` and return it.

    Sender and data are cut to their fixed field sizes. Raises
    TransactionLimitError when the list is full and InvalidTransactionError
    when the transaction is invalid; the list is then left unchanged.
    """
    if len(transactions) >= MAX_TRANSACTIONS:
        raise TransactionLimitError("Transaction limit reached for this block!")
    transaction = Transaction(
        sender=_c_string(sender, SENDER_LENGTH),
        timestamp=timestamp & _UINT64,
        data=_c_string(data, MAX_DATA_LENGTH),
    )
    if not transaction.is_valid():
        raise InvalidTransactionError("Invalid transaction!")
    transactions.append(transaction)
    return transaction