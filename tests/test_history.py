import pytest

from weatherchain.chacha20 import ChaCha20
from weatherchain.database import PAYLOAD_KEY, PAYLOAD_NONCE, Database
from weatherchain.history import (
    fetch_block_history,
    fetch_data_history,
    fetch_data_history_at,
    split_location,
)
from weatherchain.utils import format_sensor_payload


@pytest.fixture
def db():
    database = Database(":memory:")
    database.create_tables()
    yield database
    database.close()


def _payload(lat, lon, temperature, humidity):
    plain = format_sensor_payload(lat, lon, temperature, humidity, 450, 30, 40, 1013)
    return ChaCha20(PAYLOAD_KEY, PAYLOAD_NONCE, 0).xor(plain)


def test_block_history_joins_transactions(db):
    db.insert_block(1, "prev", "hash1", 1)
    db.insert_transaction(1, "sensor_data1", 1700000000000, b"abcdef")

    (row,) = fetch_block_history(db.connection)

    assert row.block_index == 1
    assert row.previous_hash == "prev"
    assert row.hash == "hash1"
    assert row.transaction_count == 1
    assert row.sender == "sensor_data1"
    assert row.timestamp == 1700000000000
    assert row.data_size == len(b"abcdef")
    assert row.recorded_at.timestamp() == pytest.approx(1700000000)


def test_block_without_transactions_appears_once(db):
    db.insert_block(0, "genesis", "hash0", 0)
    (row,) = fetch_block_history(db.connection)
    assert row.transaction_id == 0
    assert row.sender is None
    assert row.timestamp == 0
    assert row.data_size == 0


def test_block_repeated_per_transaction(db):
    db.insert_block(2, "p", "h", 2)
    db.insert_transaction(2, "a", 1, b"x")
    db.insert_transaction(2, "b", 2, b"yy")
    rows = fetch_block_history(db.connection)
    assert sorted(r.sender for r in rows) == ["a", "b"]
    assert {r.block_index for r in rows} == {2}
    assert sorted(r.data_size for r in rows) == [1, 2]


def test_data_history_decodes_payload(db):
    db.insert_data(1000, _payload(12345678, 98765432, 21, 55))
    (row,) = fetch_data_history(db.connection)
    assert row.timestamp == 1000
    assert row.latitude == "12345678"
    assert row.longitude == "98765432"
    assert row.temperature == "21"
    assert row.humidity == "55"
    assert row.location == "12345678, 98765432"


def test_location_round_trips_through_split(db):
    db.insert_data(1000, _payload(12345678, 98765432, 21, 55))
    (row,) = fetch_data_history(db.connection)
    assert split_location(row.location) == (row.latitude, row.longitude)


def test_split_location_trims():
    assert split_location("  1, 2 ") == ("1", "2")


@pytest.mark.parametrize("text", ["1,2", "1, 2, 3", "", "12345678"])
def test_split_location_rejects(text):
    with pytest.raises(ValueError):
        split_location(text)


def test_filter_by_location(db):
    db.insert_data(1000, _payload(12345678, 98765432, 21, 55))
    db.insert_data(2000, _payload(22345678, 88765432, 25, 60))
    db.insert_data(3000, _payload(12345678, 98765432, 22, 56))

    rows = fetch_data_history_at(db.connection, "12345678, 98765432")

    assert [r.timestamp for r in rows] == [1000, 3000]
    assert {r.location for r in rows} == {"12345678, 98765432"}


def test_filter_unknown_location_is_empty(db):
    db.insert_data(1000, _payload(12345678, 98765432, 21, 55))
    assert fetch_data_history_at(db.connection, "0, 0") == []


def test_filter_rejects_malformed_location(db):
    with pytest.raises(ValueError):
        fetch_data_history_at(db.connection, "12345678;98765432")


def test_data_row_recorded_at(db):
    db.insert_data(1700000000000, _payload(1, 2, 3, 4))
    (row,) = fetch_data_history(db.connection)
    assert row.recorded_at.timestamp() == pytest.approx(1700000000)