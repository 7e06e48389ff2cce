"""Blockchain text files, random bytes and sensor payload helpers."""

from __future__ import annotations

import os
import re

from .block import Block
from .blockchain import Blockchain
from .chacha20 import ChaCha20
from .transaction import Transaction

DEFAULT_CHAIN_FILE = "blockchain.txt"

_UINT32 = 0xFFFFFFFF
_BLOCK_RE = re.compile(r"Block #(-?\d+)")
_TX_RE = re.compile(r"\s*(\S+) -> (\d+): ([^\n]*)")


def save_blockchain(blockchain: Blockchain, path=DEFAULT_CHAIN_FILE) -> None:
    """Write every block of ``blockchain`` to a text file at ``path``."""
    with open(path, "w", encoding="utf-8") as handle:
        for block in blockchain:
            handle.write(f"Block #{block.index}\n")
            handle.write(f"Previous Hash: {block.previous_hash}\n")
            for tx in block.transactions:
                handle.write(f"  {tx.sender} -> {tx.timestamp}: {tx.data}\n")
            handle.write(f"Hash: {block.hash}\n\n")


def load_blockchain(path=DEFAULT_CHAIN_FILE) -> Blockchain:
    """Read a chain written by :func:`save_blockchain`.

    The previous hash is not read back; every loaded block carries "0".
    """
    chain = Blockchain()
    with open(path, encoding="utf-8") as handle:
        lines = iter(handle)
        for line in lines:
            match = _BLOCK_RE.match(line)
            if match is None:
                continue
            block = Block(index=int(match.group(1)), previous_hash="0", hash="")
            for inner in lines:
                if inner.startswith("Hash:"):
                    fields = inner.split()
                    block.hash = fields[1] if len(fields) > 1 else ""
                    break
                tx_match = _TX_RE.match(inner)
                if tx_match is not None:
                    sender, timestamp, data = tx_match.groups()
                    block.transactions.append(
                        Transaction(sender=sender, timestamp=int(timestamp), data=data)
                    )
            chain.add_block(block)
    return chain


def generate_random_bytes(size: int) -> bytes:
    """Return ``size`` bytes from the operating system's random source."""
    return os.urandom(size)


def encrypt_data(cipher: ChaCha20, data: bytes) -> bytes:
    return cipher.xor(data)


def decrypt_data(cipher: ChaCha20, data: bytes) -> bytes:
    return cipher.xor(data)


def format_sensor_payload(
    latitude: int,
    longitude: int,
    temperature: int,
    humidity: int,
    co2: int,
    no2: int,
    o3: int,
    pressure: int,
) -> bytes:
    """Join the readings as unsigned 32-bit numbers separated by ``|``."""
    values = (latitude, longitude, temperature, humidity, co2, no2, o3, pressure)
    return "|".join(str(value & _UINT32) for value in values).encode("ascii")