"""BLAKE3 hashing: plain, keyed and key-derivation modes with extendable output."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_KEY_LEN = 32
_OUT_LEN = 32
_BLOCK_LEN = 64
_CHUNK_LEN = 1024

_CHUNK_START = 1 << 0
_CHUNK_END = 1 << 1
_PARENT = 1 << 2
_ROOT = 1 << 3
_KEYED_HASH = 1 << 4
_DERIVE_KEY_CONTEXT = 1 << 5
_DERIVE_KEY_MATERIAL = 1 << 6

_IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)
_MSG_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)


def _rotr(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK


def _g(state: list[int], a: int, b: int, c: int, d: int, mx: int, my: int) -> None:
    state[a] = (state[a] + state[b] + mx) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 16)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 12)
    state[a] = (state[a] + state[b] + my) & _MASK
    state[d] = _rotr(state[d] ^ state[a], 8)
    state[c] = (state[c] + state[d]) & _MASK
    state[b] = _rotr(state[b] ^ state[c], 7)


def _round(state: list[int], m: list[int]) -> None:
    _g(state, 0, 4, 8, 12, m[0], m[1])
    _g(state, 1, 5, 9, 13, m[2], m[3])
    _g(state, 2, 6, 10, 14, m[4], m[5])
    _g(state, 3, 7, 11, 15, m[6], m[7])
    _g(state, 0, 5, 10, 15, m[8], m[9])
    _g(state, 1, 6, 11, 12, m[10], m[11])
    _g(state, 2, 7, 8, 13, m[12], m[13])
    _g(state, 3, 4, 9, 14, m[14], m[15])


def _compress(cv, block_words, counter: int, block_len: int, flags: int) -> list[int]:
    state = [
        *cv, *_IV[:4],
        counter & _MASK, (counter >> 32) & _MASK, block_len, flags,
    ]
    words = list(block_words)
    for _ in range(7):
        _round(state, words)
        words = [words[i] for i in _MSG_PERMUTATION]
    for i in range(8):
        state[i] ^= state[i + 8]
        state[i + 8] ^= cv[i]
    return state


def _block_words(block: bytes) -> tuple[int, ...]:
    return struct.unpack("<16I", block.ljust(_BLOCK_LEN, b"\x00"))


class _Output:
    def __init__(self, input_cv, block_words, counter: int, block_len: int, flags: int) -> None:
        self.input_cv = tuple(input_cv)
        self.block_words = block_words
        self.counter = counter
        self.block_len = block_len
        self.flags = flags

    def chaining_value(self) -> list[int]:
        return _compress(
            self.input_cv, self.block_words, self.counter, self.block_len, self.flags
        )[:8]

    def root_bytes(self, length: int, seek: int) -> bytes:
        out = bytearray()
        counter, offset = divmod(seek, _BLOCK_LEN)
        while len(out) < length:
            words = _compress(
                self.input_cv, self.block_words, counter, self.block_len, self.flags | _ROOT
            )
            out += struct.pack("<16I", *words)[offset:]
            offset = 0
            counter += 1
        return bytes(out[:length])


class _ChunkState:
    def __init__(self, key_words, chunk_counter: int, flags: int) -> None:
        self.chaining_value = list(key_words)
        self.chunk_counter = chunk_counter
        self.block = bytearray()
        self.blocks_compressed = 0
        self.flags = flags

    def __len__(self) -> int:
        return _BLOCK_LEN * self.blocks_compressed + len(self.block)

    def _start_flag(self) -> int:
        return _CHUNK_START if self.blocks_compressed == 0 else 0

    def update(self, data: memoryview) -> None:
        while data:
            if len(self.block) == _BLOCK_LEN:
                self.chaining_value = _compress(
                    self.chaining_value,
                    _block_words(bytes(self.block)),
                    self.chunk_counter,
                    _BLOCK_LEN,
                    self.flags | self._start_flag(),
                )[:8]
                self.blocks_compressed += 1
                self.block = bytearray()
            take = min(_BLOCK_LEN - len(self.block), len(data))
            self.block += data[:take]
            data = data[take:]

    def output(self) -> _Output:
        return _Output(
            self.chaining_value,
            _block_words(bytes(self.block)),
            self.chunk_counter,
            len(self.block),
            self.flags | self._start_flag() | _CHUNK_END,
        )


def _parent_output(left, right, key_words, flags: int) -> _Output:
    return _Output(key_words, (*left, *right), 0, _BLOCK_LEN, _PARENT | flags)


class Blake3:
    """Incremental BLAKE3 hasher; pass a 32-byte ``key`` for keyed hashing."""

    def __init__(self, key: bytes | None = None) -> None:
        if key is None:
            self._setup(_IV, 0)
        else:
            key = bytes(key)
            if len(key) != _KEY_LEN:
                raise ValueError("BLAKE3 key must be 32 bytes")
            self._setup(struct.unpack("<8I", key), _KEYED_HASH)

    def _setup(self, key_words, flags: int) -> None:
        self._key_words = tuple(key_words)
        self._flags = flags
        self._chunk = _ChunkState(self._key_words, 0, flags)
        self._cv_stack: list[list[int]] = []

    @classmethod
    def _with_mode(cls, key_words, flags: int) -> "Blake3":
        hasher = cls.__new__(cls)
        hasher._setup(key_words, flags)
        return hasher

    @classmethod
    def derive_key(cls, context: str | bytes) -> "Blake3":
        """Return a hasher in key-derivation mode for ``context``."""
        if isinstance(context, str):
            context = context.encode("utf-8")
        context_key = cls._with_mode(_IV, _DERIVE_KEY_CONTEXT).update(context).digest()
        return cls._with_mode(struct.unpack("<8I", context_key), _DERIVE_KEY_MATERIAL)

    def _push_chunk(self, cv: list[int], total_chunks: int) -> None:
        while total_chunks & 1 == 0:
            cv = _parent_output(
                self._cv_stack.pop(), cv, self._key_words, self._flags
            ).chaining_value()
            total_chunks >>= 1
        self._cv_stack.append(cv)

    def update(self, data: bytes) -> "Blake3":
        """Feed ``data`` into the hasher and return it."""
        view = memoryview(bytes(data))
        while view:
            if len(self._chunk) == _CHUNK_LEN:
                cv = self._chunk.output().chaining_value()
                total_chunks = self._chunk.chunk_counter + 1
                self._push_chunk(cv, total_chunks)
                self._chunk = _ChunkState(self._key_words, total_chunks, self._flags)
            take = min(_CHUNK_LEN - len(self._chunk), len(view))
            self._chunk.update(view[:take])
            view = view[take:]
        return self

    def digest(self, length: int = _OUT_LEN, seek: int = 0) -> bytes:
        """Return ``length`` output bytes starting at offset ``seek``."""
        if length < 0 or seek < 0:
            raise ValueError("length and seek must not be negative")
        output = self._chunk.output()
        for cv in reversed(self._cv_stack):
            output = _parent_output(cv, output.chaining_value(), self._key_words, self._flags)
        return output.root_bytes(length, seek)

    def hexdigest(self, length: int = _OUT_LEN) -> str:
        return self.digest(length).hex()

    def reset(self) -> None:
        """Discard all input, keeping the key and mode."""
        self._setup(self._key_words, self._flags)