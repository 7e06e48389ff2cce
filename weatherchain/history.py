"""Tabular views of stored blocks and sensor readings."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime

_BLOCK_QUERY = (
    "SELECT blocks.id, blocks.block_index, blocks.previous_hash, blocks.hash, "
    "blocks.transaction_count, transactions.id AS transaction_id, "
    "transactions.sender, transactions.timestamp, transactions.data "
    "FROM blocks "
    "LEFT JOIN transactions ON blocks.block_index = transactions.block_index;"
)

_DATA_QUERY = (
    "SELECT id, timestamp, latitude, longitude, temperature, humidity, "
    "pressure, co2, no2, o3 FROM data"
)


def _from_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000)


@dataclass(frozen=True)
class BlockHistoryRow:
    """One block joined with one of its transactions, if any."""

    block_id: int
    block_index: int
    previous_hash: str | None
    hash: str | None
    transaction_count: int
    transaction_id: int
    sender: str | None
    timestamp: int
    data_size: int

    @property
    def recorded_at(self) -> datetime:
        """The transaction timestamp, read as milliseconds, in local time."""
        return _from_millis(self.timestamp)


@dataclass(frozen=True)
class DataHistoryRow:
    """One stored sensor reading."""

    id: int
    timestamp: int
    latitude: str | None
    longitude: str | None
    temperature: str | None
    humidity: str | None
    pressure: str | None
    co2: str | None
    no2: str | None
    o3: str | None

    @property
    def location(self) -> str:
        """The location as ``"lat, lon"``, the form :func:`split_location` reads."""
        return f"{self.latitude or ''}, {self.longitude or ''}"

    @property
    def recorded_at(self) -> datetime:
        """The timestamp, read as milliseconds, in local time."""
        return _from_millis(self.timestamp)


def fetch_block_history(connection: sqlite3.Connection) -> list[BlockHistoryRow]:
    """Return every block, once per transaction; blocks without any come once."""
    rows = []
    for (
        block_id,
        block_index,
        previous_hash,
        block_hash,
        transaction_count,
        transaction_id,
        sender,
        timestamp,
        data,
    ) in connection.execute(_BLOCK_QUERY):
        rows.append(
            BlockHistoryRow(
                block_id=block_id or 0,
                block_index=block_index or 0,
                previous_hash=previous_hash,
                hash=block_hash,
                transaction_count=transaction_count or 0,
                transaction_id=transaction_id or 0,
                sender=sender,
                timestamp=timestamp or 0,
                data_size=0 if data is None else len(data),
            )
        )
    return rows


def _data_rows(cursor) -> list[DataHistoryRow]:
    return [
        DataHistoryRow(
            id=row[0] or 0,
            timestamp=row[1] or 0,
            latitude=row[2],
            longitude=row[3],
            temperature=row[4],
            humidity=row[5],
            pressure=row[6],
            co2=row[7],
            no2=row[8],
            o3=row[9],
        )
        for row in cursor
    ]


def fetch_data_history(connection: sqlite3.Connection) -> list[DataHistoryRow]:
    """Return every stored sensor reading."""
    return _data_rows(connection.execute(_DATA_QUERY))


def split_location(location: str) -> tuple[str, str]:
    """Split ``"lat, lon"`` into its two parts; raise ValueError otherwise."""
    parts = location.strip().split(", ")
    if len(parts) != 2:
        raise ValueError(f"location must be 'latitude, longitude': {location!r}")
    return parts[0], parts[1]


def fetch_data_history_at(
    connection: sqlite3.Connection, location: str
) -> list[DataHistoryRow]:
    """Return the readings taken at ``location``, given as ``"lat, lon"``."""
    latitude, longitude = split_location(location)
    cursor = connection.execute(
        f"{_DATA_QUERY} WHERE latitude = ? AND longitude = ?",
        (latitude, longitude),
    )
    return _data_rows(cursor)