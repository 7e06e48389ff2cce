"""Blocks: an index, the previous block's hash, transactions and a hash."""

from __future__ import annotations

from dataclasses import dataclass, field

from .hashing import blake3_hash
from .transaction import Transaction, _c_string, add_transaction

HASH_LENGTH = 65
_INPUT_LIMIT = 511


def _digest_hex(text: str) -> str:
    return blake3_hash(text.encode("utf-8")[:_INPUT_LIMIT]).hex()


@dataclass
class Block:
    index: int
    previous_hash: str
    hash: str
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def add_transaction(self, sender: str, timestamp: int, data: str) -> Transaction:
        return add_transaction(self.transactions, sender, timestamp, data)

    def verify(self) -> bool:
        """Recompute the hash over index, previous hash and transactions.

        The stored hash covers only index and previous hash, so a block
        verifies only while it holds no transactions.
        """
        text = f"{self.index}{self.previous_hash}" + "".join(
            f"{tx.sender}{tx.timestamp}{tx.data}" for tx in self.transactions
        )
        return _digest_hex(text) == self.hash

    def format(self) -> str:
        lines = [
            f"Block #{self.index}\n",
            f"Previous Hash: {self.previous_hash}\n",
            "Transactions:\n",
            *(f"  {tx.sender} -> {tx.timestamp}: {tx.data}\n" for tx in self.transactions),
            f"Hash: {self.hash}\n\n",
        ]
        return "".join(lines)


def create_block(index: int, previous_hash: str) -> Block:
    """Create an empty block whose hash is BLAKE3 of index and previous hash."""
    return Block(
        index=index,
        previous_hash=_c_string(previous_hash, HASH_LENGTH),
        hash=_digest_hex(f"{index}{previous_hash}"),
    )