"""An append-only chain of blocks."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .block import Block


@dataclass
class Blockchain:
    blocks: list[Block] = field(default_factory=list)

    def add_block(self, block: Block) -> None:
        self.blocks.append(block)

    def verify(self) -> bool:
        """True when every block verifies."""
        return all(block.verify() for block in self.blocks)

    def format(self) -> str:
        return "".join(block.format() for block in self.blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)