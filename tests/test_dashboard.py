import sqlite3

import pytest

from weatherchain.dashboard import Dashboard, SensorSnapshot, latest_readings

_INSERT = (
    "INSERT INTO data (timestamp, latitude, longitude, temperature, humidity, "
    "pressure, co2, no2, o3) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"
)


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE data (id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "timestamp BIGINT NOT NULL, latitude TEXT, longitude TEXT, "
        "temperature TEXT, humidity TEXT, pressure TEXT, co2 TEXT, no2 TEXT, o3 TEXT)"
    )
    yield conn
    conn.close()


def _insert(conn, timestamp, lat, lon, temperature="20", humidity="50",
            pressure="1000", co2="400", no2="10", o3="5"):
    conn.execute(_INSERT, (timestamp, lat, lon, temperature, humidity,
                           pressure, co2, no2, o3))


def test_empty_database_has_no_readings(connection):
    assert latest_readings(connection) == []


def test_latest_reading_is_newest_by_timestamp(connection):
    _insert(connection, 1000, "12345678", "98765432", temperature="11")
    _insert(connection, 3000, "12345678", "98765432", temperature="33")
    _insert(connection, 2000, "12345678", "98765432", temperature="22")
    (snapshot,) = latest_readings(connection)
    assert snapshot.temperature == 33.0
    assert snapshot.latitude == "12345678"
    assert snapshot.longitude == "98765432"


def test_one_snapshot_per_location(connection):
    _insert(connection, 1, "12345678", "98765432")
    _insert(connection, 2, "22345678", "88765432")
    _insert(connection, 3, "12345678", "98765432")
    snapshots = latest_readings(connection)
    assert {(s.latitude, s.longitude) for s in snapshots} == {
        ("12345678", "98765432"),
        ("22345678", "88765432"),
    }


def test_non_numeric_values_read_as_zero_or_prefix(connection):
    _insert(connection, 1, "1", "2", temperature="abc", humidity="42xyz", pressure=None)
    (snapshot,) = latest_readings(connection)
    assert snapshot.temperature == 0.0
    assert snapshot.humidity == 42.0
    assert snapshot.pressure == 0.0


def test_null_location_is_left_out(connection):
    _insert(connection, 1, None, None)
    assert latest_readings(connection) == []


def test_snapshot_labels():
    snapshot = SensorSnapshot("12345678", "98765432", 25.5, 60.0, 1013.0, 400.0, 10.0, 5.0)
    labels = snapshot.labels()
    assert labels["location"] == "Longitude: 98765432 - Latitude: 12345678"
    assert labels["temperature"] == "25.5°C"
    assert labels["humidity"] == "60%"
    assert labels["pressure"] == "1013 hPa"


def test_dashboard_fills_only_available_slots(connection):
    _insert(connection, 1, "12345678", "98765432", temperature="30")
    dashboard = Dashboard(connection, 5)
    labels = dashboard.refresh()
    assert len(labels) == 5
    assert labels[0]["temperature"] == "30°C"
    assert labels[1:] == [None] * 4


def test_dashboard_limits_to_slot_count(connection):
    for i in range(4):
        _insert(connection, i, f"{i}1", f"{i}2")
    dashboard = Dashboard(connection, 2)
    labels = dashboard.refresh()
    assert len(labels) == 2
    assert all(label is not None for label in labels)
    assert len(dashboard.snapshots) == 4


def test_dashboard_updates_on_refresh(connection):
    _insert(connection, 1, "1", "2", temperature="10")
    dashboard = Dashboard(connection, 1)
    assert dashboard.refresh()[0]["temperature"] == "10°C"
    _insert(connection, 2, "1", "2", temperature="15")
    assert dashboard.refresh()[0]["temperature"] == "15°C"


def test_dashboard_keeps_labels_when_data_disappears(connection):
    _insert(connection, 1, "1", "2", temperature="10")
    dashboard = Dashboard(connection, 1)
    first = dashboard.refresh()
    connection.execute("DELETE FROM data")
    assert dashboard.refresh() == first


def test_negative_slots_rejected(connection):
    with pytest.raises(ValueError):
        Dashboard(connection, -1)