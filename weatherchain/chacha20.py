"""ChaCha20 stream cipher used to protect sensor payloads."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_BLOCK_SIZE = 64
_CONSTANTS = struct.unpack("<4I", b"expand 32-byte k")


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _quarter_round(x: list[int], a: int, b: int, c: int, d: int) -> None:
    x[a] = (x[a] + x[b]) & _MASK
    x[d] = _rotl(x[d] ^ x[a], 16)
    x[c] = (x[c] + x[d]) & _MASK
    x[b] = _rotl(x[b] ^ x[c], 12)
    x[a] = (x[a] + x[b]) & _MASK
    x[d] = _rotl(x[d] ^ x[a], 8)
    x[c] = (x[c] + x[d]) & _MASK
    x[b] = _rotl(x[b] ^ x[c], 7)


class ChaCha20:
    """A ChaCha20 keystream that XORs data across successive calls.

    The 64-bit block counter occupies state word 12 and is carried into
    word 13, which starts from the first nonce word.
    """

    def __init__(self, key: bytes, nonce: bytes = bytes(12), counter: int = 0) -> None:
        key = bytes(key)
        nonce = bytes(nonce)
        if len(key) != 32:
            raise ValueError("ChaCha20 key must be 32 bytes")
        if len(nonce) != 12:
            raise ValueError("ChaCha20 nonce must be 12 bytes")
        if not 0 <= counter < 1 << 64:
            raise ValueError("ChaCha20 counter must fit in 64 bits")
        nonce_words = struct.unpack("<3I", nonce)
        self._state = [
            *_CONSTANTS,
            *struct.unpack("<8I", key),
            counter & _MASK,
            (nonce_words[0] + (counter >> 32)) & _MASK,
            nonce_words[1],
            nonce_words[2],
        ]
        self._keystream = b""
        self._position = _BLOCK_SIZE

    def _next_block(self) -> bytes:
        working = list(self._state)
        for _ in range(10):
            _quarter_round(working, 0, 4, 8, 12)
            _quarter_round(working, 1, 5, 9, 13)
            _quarter_round(working, 2, 6, 10, 14)
            _quarter_round(working, 3, 7, 11, 15)
            _quarter_round(working, 0, 5, 10, 15)
            _quarter_round(working, 1, 6, 11, 12)
            _quarter_round(working, 2, 7, 8, 13)
            _quarter_round(working, 3, 4, 9, 14)
        block = struct.pack(
            "<16I", *((w + s) & _MASK for w, s in zip(working, self._state))
        )
        self._state[12] = (self._state[12] + 1) & _MASK
        if self._state[12] == 0:
            self._state[13] = (self._state[13] + 1) & _MASK
            if self._state[13] == 0:
                raise OverflowError("ChaCha20 block counter exhausted")
        return block

    def xor(self, data: bytes) -> bytes:
        """Return ``data`` XORed with the next bytes of the keystream."""
        view = memoryview(bytes(data))
        out = bytearray()
        while view:
            if self._position >= _BLOCK_SIZE:
                self._keystream = self._next_block()
                self._position = 0
            take = min(_BLOCK_SIZE - self._position, len(view))
            stream = self._keystream[self._position:self._position + take]
            out += bytes(a ^ b for a, b in zip(view[:take], stream))
            self._position += take
            view = view[take:]
        return bytes(out)