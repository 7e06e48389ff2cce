import pytest

from weatherchain.blake3 import Blake3


def test_empty_input_digest():
    assert Blake3().hexdigest() == (
        "af1349b9f5f9a1a6a0404dea36dcc9499bcb25c9adc112b7cc9a93cae41f3262"
    )


def test_abc_digest():
    assert Blake3().update(b"abc").hexdigest() == (
        "6437b3ac38465133ffb63b75273a8db548c558465d79db03fd359c6cd5bd9d85"
    )


@pytest.mark.parametrize("size", [0, 1, 63, 64, 65, 1023, 1024, 1025, 2048, 3100, 5000])
def test_incremental_matches_one_shot(size):
    data = bytes(i % 251 for i in range(size))
    one_shot = Blake3().update(data).digest()
    hasher = Blake3()
    for start in range(0, size, 100):
        hasher.update(data[start:start + 100])
    assert hasher.digest() == one_shot


def test_longer_output_extends_shorter():
    hasher = Blake3().update(b"weather")
    assert hasher.digest(100)[:32] == hasher.digest()
    assert len(hasher.digest(100)) == 100


def test_seek_matches_offset_into_output():
    hasher = Blake3().update(b"station data")
    full = hasher.digest(200)
    assert hasher.digest(50, seek=70) == full[70:120]


def test_digest_does_not_consume_state():
    hasher = Blake3().update(b"part one")
    first = hasher.digest()
    assert hasher.digest() == first
    hasher.update(b" part two")
    assert hasher.digest() == Blake3().update(b"part one part two").digest()


def test_reset_restores_fresh_state():
    key = bytes(range(32))
    hasher = Blake3(key).update(b"something")
    hasher.reset()
    hasher.update(b"other")
    assert hasher.digest() == Blake3(key).update(b"other").digest()


def test_keyed_differs_from_plain():
    key = bytes(range(32))
    assert Blake3(key).update(b"x").digest() != Blake3().update(b"x").digest()
    assert Blake3(key).update(b"x").digest() == Blake3(key).update(b"x").digest()


def test_bad_key_length():
    with pytest.raises(ValueError):
        Blake3(b"too short")


def test_derive_key_depends_on_context():
    one = Blake3.derive_key("context one").update(b"material").digest()
    again = Blake3.derive_key(b"context one").update(b"material").digest()
    two = Blake3.derive_key("context two").update(b"material").digest()
    assert one == again
    assert one != two


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        Blake3().digest(-1)