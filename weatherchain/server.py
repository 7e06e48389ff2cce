"""Blockchain server that records polled sensor readings."""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable, Iterable

from .block import Block, create_block
from .blockchain import Blockchain
from .database import Database
from .logger import Logger, LogLevel
from .transaction import InvalidTransactionError, TransactionLimitError

GENESIS_PREVIOUS_HASH = "0123456789012345678901234567890123456789012345678901234567890123"

DEFAULT_URLS = (
    "sensor_data1/12345678/98765432",
    "sensor_data2/22345678/88765432",
    "sensor_data3/32345678/78765432",
    "sensor_data4/42345678/68765432",
    "sensor_data5/52345678/58765432",
)

_LOG_LIMIT = 255

_log = logging.getLogger(__name__)

Retriever = Callable[[str], "tuple[int, bytes] | None"]


def _payload_text(data: bytes) -> str:
    return bytes(data).split(b"\x00", 1)[0].decode("latin-1")


class BlockchainServer:
    """Holds the chain and mirrors every new block into the database."""

    def __init__(self, database: Database, logger: Logger) -> None:
        self.database = database
        self.logger = logger
        self.blockchain = Blockchain()
        genesis = create_block(0, GENESIS_PREVIOUS_HASH)
        self._try_add(genesis, "Alice", 0, "Hello, Bob!")
        self.blockchain.add_block(genesis)
        self.database.create_tables()

    @staticmethod
    def _try_add(block: Block, sender: str, timestamp: int, data: str) -> None:
        # A rejected transaction leaves the block empty; the block is kept.
        try:
            block.add_transaction(sender, timestamp, data)
        except (InvalidTransactionError, TransactionLimitError) as error:
            _log.warning("%s", error)

    def create_and_add_block(self, sender: str, timestamp: int, data: str) -> Block:
        """Append a block holding one transaction and return it."""
        tail = self.blockchain.blocks[-1]
        block = create_block(tail.index + 1, tail.hash)
        self._try_add(block, sender, timestamp, data)
        self.blockchain.add_block(block)
        return block

    def record_sensor_data(self, url: str, timestamp: int, data: bytes) -> Block:
        """Log a reading, add it to the chain and store it in the database."""
        text = _payload_text(data)
        message = f"Retrieved sensor data for URL {url}: Timestamp: {timestamp}, Data: {text}"
        self.logger.log(LogLevel.INFO, message[:_LOG_LIMIT])

        block = self.create_and_add_block(url, timestamp, text)
        self.database.insert_block(
            block.index, block.previous_hash, block.hash, block.transaction_count
        )
        for tx in block.transactions:
            blob = tx.data.encode("latin-1")
            self.database.insert_transaction(block.index, tx.sender, tx.timestamp, blob)
            self.database.insert_data(tx.timestamp, blob)
        return block

    def poll(self, retrieve: Retriever, urls: Iterable[str] = DEFAULT_URLS) -> int:
        """Ask ``retrieve`` for each URL and record what it returns.

        ``retrieve`` returns ``(timestamp, data)`` or None. Returns the
        number of readings recorded.
        """
        recorded = 0
        for url in urls:
            reading = retrieve(url)
            if reading:
                timestamp, data = reading
                self.record_sensor_data(url, timestamp, data)
                recorded += 1
        return recorded

    def run(
        self,
        retrieve: Retriever,
        urls: Iterable[str] = DEFAULT_URLS,
        interval: float = 2.0,
        rounds: int | None = None,
    ) -> bool:
        """Poll every ``interval`` seconds, forever when ``rounds`` is None.

        After the last round the chain and its validity are printed and the
        validity is returned.
        """
        urls = tuple(urls)
        counter = itertools.count() if rounds is None else range(rounds)
        for _ in counter:
            self.poll(retrieve, urls)
            time.sleep(interval)
        print(self.blockchain.format(), end="")
        valid = self.blockchain.verify()
        print("Blockchain is valid!" if valid else "Blockchain is invalid!")
        return valid