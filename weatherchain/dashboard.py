"""Latest readings per sensor location, laid out in a fixed number of slots."""

from __future__ import annotations

import math
import re
import sqlite3
from dataclasses import dataclass

DEFAULT_SLOTS = 5

_LOCATIONS_QUERY = "SELECT latitude, longitude FROM data GROUP BY latitude, longitude"
_LATEST_QUERY = (
    "SELECT temperature, humidity, pressure, co2, no2, o3 "
    "FROM data WHERE latitude = ? AND longitude = ? "
    "ORDER BY timestamp DESC LIMIT 1"
)
_COORDINATE_SIZE = 20

_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _atof(text) -> float:
    """Read the leading number of ``text``; 0.0 when there is none."""
    if text is None:
        return 0.0
    match = _NUMBER_PREFIX.match(str(text))
    if match is None:
        return 0.0
    return float(match.group(1))


def _number_text(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:g}"


@dataclass(frozen=True)
class SensorSnapshot:
    """The most recent reading taken at one location."""

    latitude: str
    longitude: str
    temperature: float
    humidity: float
    pressure: float
    co2: float
    no2: float
    o3: float

    def labels(self) -> dict[str, str]:
        """The texts shown for this location."""
        return {
            "location": f"Longitude: {self.longitude} - Latitude: {self.latitude}",
            "temperature": f"{_number_text(self.temperature)}°C",
            "humidity": f"{_number_text(self.humidity)}%",
            "pressure": f"{_number_text(self.pressure)} hPa",
        }


def latest_readings(connection: sqlite3.Connection) -> list[SensorSnapshot]:
    """Return the newest reading for every distinct location.

    Values that are not numeric read as 0.0; locations that are NULL match
    no reading and are left out.
    """
    snapshots = []
    for latitude, longitude in connection.execute(_LOCATIONS_QUERY).fetchall():
        row = connection.execute(_LATEST_QUERY, (latitude, longitude)).fetchone()
        if row is None:
            continue
        temperature, humidity, pressure, co2, no2, o3 = (_atof(v) for v in row)
        snapshots.append(
            SensorSnapshot(
                latitude=str(latitude)[:_COORDINATE_SIZE],
                longitude=str(longitude)[:_COORDINATE_SIZE],
                temperature=temperature,
                humidity=humidity,
                pressure=pressure,
                co2=co2,
                no2=no2,
                o3=o3,
            )
        )
    return snapshots


class Dashboard:
    """A fixed set of display slots filled from the latest readings.

    A slot keeps its last labels when a refresh brings fewer locations
    than there are slots.
    """

    def __init__(self, connection: sqlite3.Connection, slots: int = DEFAULT_SLOTS) -> None:
        if slots < 0:
            raise ValueError("slots must not be negative")
        self.connection = connection
        self.slots = slots
        self.snapshots: list[SensorSnapshot] = []
        self.labels: list[dict[str, str] | None] = [None] * slots

    def refresh(self) -> list[dict[str, str] | None]:
        """Query the database again and update the slots' labels."""
        self.snapshots = latest_readings(self.connection)
        for slot, snapshot in zip(range(self.slots), self.snapshots):
            self.labels[slot] = snapshot.labels()
        return list(self.labels)