"""SQLite storage for blocks, transactions and decoded sensor readings."""

from __future__ import annotations

import sqlite3
import threading

from .chacha20 import ChaCha20
from .utils import decrypt_data

PAYLOAD_KEY = b"0123456789abcdef" * 2
PAYLOAD_NONCE = bytes(12)

DATA_COLUMNS = (
    "latitude",
    "longitude",
    "temperature",
    "humidity",
    "pressure",
    "co2",
    "no2",
    "o3",
)

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS blocks ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "block_index INTEGER NOT NULL, "
    "previous_hash TEXT NOT NULL, "
    "hash TEXT NOT NULL, "
    "transaction_count INTEGER NOT NULL);",
    "CREATE TABLE IF NOT EXISTS transactions ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "block_index INTEGER NOT NULL, "
    "sender TEXT NOT NULL, "
    "timestamp BIGINT NOT NULL, "
    "data BLOB NOT NULL, "
    "FOREIGN KEY (block_index) REFERENCES blocks (block_index) ON DELETE CASCADE);",
    "CREATE TABLE IF NOT EXISTS data ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "timestamp BIGINT NOT NULL, "
    "latitude TEXT, "
    "longitude TEXT, "
    "temperature TEXT, "
    "humidity TEXT, "
    "pressure TEXT, "
    "co2 TEXT, "
    "no2 TEXT, "
    "o3 TEXT);",
)


def _as_int64(value: int) -> int:
    value &= (1 << 64) - 1
    return value - (1 << 64) if value >= 1 << 63 else value


def decode_sensor_payload(data: bytes) -> tuple[str | None, ...]:
    """Decrypt a sensor payload and split it into the eight data columns.

    Empty fields between separators are skipped; missing columns are None.
    """
    plain = decrypt_data(ChaCha20(PAYLOAD_KEY, PAYLOAD_NONCE, 0), data)
    text = plain.split(b"\x00", 1)[0].decode("utf-8", errors="replace")
    tokens = [token for token in text.split("|") if token][: len(DATA_COLUMNS)]
    return tuple(tokens) + (None,) * (len(DATA_COLUMNS) - len(tokens))


class Database:
    """A shared SQLite connection guarded by a lock."""

    def __init__(self, path) -> None:
        self.connection = sqlite3.connect(
            path, check_same_thread=False, isolation_level=None
        )
        self.lock = threading.RLock()

    def create_tables(self) -> None:
        with self.lock:
            for statement in _SCHEMA:
                self.connection.execute(statement)

    def insert_block(
        self, index: int, previous_hash: str, hash: str, transaction_count: int
    ) -> int:
        """Insert a row into ``blocks`` and return its id."""
        with self.lock:
            cursor = self.connection.execute(
                "INSERT INTO blocks (block_index, previous_hash, hash, transaction_count)"
                " VALUES (?, ?, ?, ?);",
                (index, previous_hash, hash, transaction_count),
            )
            return cursor.lastrowid

    def insert_transaction(
        self, block_index: int, sender: str, timestamp: int, data: bytes
    ) -> int:
        """Insert a row into ``transactions`` with ``data`` as a blob."""
        with self.lock:
            cursor = self.connection.execute(
                "INSERT INTO transactions (block_index, sender, timestamp, data)"
                " VALUES (?, ?, ?, ?);",
                (block_index, sender, _as_int64(timestamp), bytes(data)),
            )
            return cursor.lastrowid

    def insert_data(self, timestamp: int, data: bytes) -> int:
        """Decrypt a sensor payload and insert its fields into ``data``."""
        values = decode_sensor_payload(bytes(data))
        columns = ", ".join(DATA_COLUMNS)
        marks = ", ".join("?" * (len(DATA_COLUMNS) + 1))
        with self.lock:
            cursor = self.connection.execute(
                f"INSERT INTO data (timestamp, {columns}) VALUES ({marks})",
                (_as_int64(timestamp), *values),
            )
            return cursor.lastrowid

    def close(self) -> None:
        with self.lock:
            self.connection.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args) -> None:
        self.close()