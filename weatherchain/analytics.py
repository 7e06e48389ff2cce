"""Time series of one sensor reading, grouped by sensor location."""

from __future__ import annotations

import logging
import sqlite3
from enum import Enum

SERIES_LIMIT = 300

_log = logging.getLogger(__name__)


class PlotType(Enum):
    """The readings that can be plotted, named as they are shown."""

    TEMPERATURE = "Temperature"
    HUMIDITY = "Humidity"
    PRESSURE = "Pressure"
    CO2 = "CO2"
    NO2 = "NO2"
    O3 = "O3"

    @property
    def column(self) -> str:
        """The ``data`` table column holding this reading."""
        return self.value.lower()


def _number(value) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def fetch_series(
    connection: sqlite3.Connection, plot_type: PlotType | str
) -> dict[str, list[tuple[int, float]]]:
    """Return the latest readings of ``plot_type`` keyed by ``"lat,lon"``.

    At most SERIES_LIMIT rows are read, newest first. Rows whose location
    is not numeric are skipped; rows with a non-numeric value are skipped
    with a warning. Keys come out in sorted order.
    """
    kind = PlotType(plot_type)
    query = (
        f"SELECT timestamp, {kind.column}, latitude, longitude FROM data "
        f"ORDER BY timestamp DESC LIMIT {SERIES_LIMIT}"
    )
    series: dict[str, list[tuple[int, float]]] = {}
    for timestamp, value, latitude, longitude in connection.execute(query):
        if _number(latitude) is None or _number(longitude) is None:
            continue
        key = f"{latitude},{longitude}"
        number = _number(value)
        if number is None:
            _log.warning("Invalid data value for %s : %s", key, value)
            continue
        series.setdefault(key, []).append((int(timestamp), number))
    return dict(sorted(series.items()))