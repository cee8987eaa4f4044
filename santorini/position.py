"""
Bit-packed cells of the 5x5 board.

Cell (row, col) is bit ``row * STRIDE + col``. Rows are six bits wide so that
column 5 of every row, and the whole of row 5, are padding bits no valid cell
ever uses. The padding column keeps the last cell of a row and the first cell
of the next row two bits apart, which is what makes the shift and
bit-difference adjacency tests below correct.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

SIZE = 5
STRIDE = SIZE + 1
WIDTH = STRIDE * STRIDE
FULL_MASK = (1 << WIDTH) - 1

NEIGHBOR_OFFSETS = (1, STRIDE - 1, STRIDE, STRIDE + 1)


def _valid_mask() -> int:
    mask = 0
    for row in range(SIZE):
        for col in range(SIZE):
            mask |= 1 << (row * STRIDE + col)
    return mask


VALID_MASK = _valid_mask()
SENTINEL_MASK = FULL_MASK & ~VALID_MASK


def _shift(mask: int, offset: int) -> int:
    if offset > 0:
        return (mask << offset) & FULL_MASK
    return mask >> (-offset)


@dataclass(frozen=True, order=True)
class Position:
    mask: int

    def __post_init__(self) -> None:
        if self.mask <= 0 or self.mask & (self.mask - 1):
            raise ValueError(f"position mask must have exactly one bit set: {self.mask:#x}")
        if self.mask & ~VALID_MASK:
            raise ValueError(f"position mask lies outside the board: {self.mask:#x}")

    @classmethod
    def at(cls, row: int, col: int) -> "Position":
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise ValueError(f"cell ({row}, {col}) is outside the {SIZE}x{SIZE} board")
        return cls(1 << (row * STRIDE + col))

    @classmethod
    def from_mask(cls, mask: int) -> "Position":
        return cls(mask)

    @property
    def index(self) -> int:
        return self.mask.bit_length() - 1

    def row(self) -> int:
        return self.index // STRIDE

    def col(self) -> int:
        return self.index % STRIDE

    def coords(self) -> Tuple[int, int]:
        return self.row(), self.col()

    def get_neighbors(self) -> "PositionSet":
        """The king-move neighbors of this cell, never including the cell itself."""
        acc = 0
        for offset in NEIGHBOR_OFFSETS:
            for signed in (offset, -offset):
                shifted = _shift(self.mask, signed)
                if shifted and not shifted & SENTINEL_MASK:
                    acc |= shifted
        return PositionSet(acc)

    @staticmethod
    def are_neighbors(p1: "Position", p2: "Position") -> bool:
        # Only sound for valid cells: the padding column rules out row wraparound.
        return abs(p1.index - p2.index) in NEIGHBOR_OFFSETS

    # Cursor moves wrap around the 5x5 board.

    def up(self) -> "Position":
        moved = self.mask >> STRIDE
        if not moved:
            moved = self.mask << (STRIDE * (SIZE - 1))
        return Position(moved)

    def down(self) -> "Position":
        moved = self.mask << STRIDE
        if moved & SENTINEL_MASK:
            moved = self.mask >> (STRIDE * (SIZE - 1))
        return Position(moved)

    def left(self) -> "Position":
        moved = self.mask >> 1
        if not moved or moved & SENTINEL_MASK:
            moved = self.mask << (SIZE - 1)
        return Position(moved)

    def right(self) -> "Position":
        moved = self.mask << 1
        if moved & SENTINEL_MASK:
            moved = self.mask >> (SIZE - 1)
        return Position(moved)

    def __repr__(self) -> str:
        return f"Position({self.row()}, {self.col()})"


@dataclass(frozen=True)
class PositionSet:
    """An immutable set of cells packed into one integer.

    Iterating yields cells from the highest bit index down; ``reversed`` yields
    them from the lowest up, which is row-major order.
    """

    mask: int = 0

    def __post_init__(self) -> None:
        if self.mask < 0 or self.mask & ~VALID_MASK:
            raise ValueError(f"position set mask lies outside the board: {self.mask:#x}")

    @classmethod
    def empty(cls) -> "PositionSet":
        return cls(0)

    @classmethod
    def from_positions(cls, positions: Iterable[Position]) -> "PositionSet":
        mask = 0
        for position in positions:
            mask |= position.mask
        return cls(mask)

    def union(self, other: "PositionSet") -> "PositionSet":
        return PositionSet(self.mask | other.mask)

    def intersection(self, other: "PositionSet") -> "PositionSet":
        return PositionSet(self.mask & other.mask)

    def difference(self, other: "PositionSet") -> "PositionSet":
        return PositionSet(self.mask & ~other.mask)

    def add(self, position: Position) -> "PositionSet":
        return PositionSet(self.mask | position.mask)

    def remove(self, position: Position) -> "PositionSet":
        return PositionSet(self.mask & ~position.mask)

    def contains(self, position: Position) -> bool:
        return bool(self.mask & position.mask)

    def is_empty(self) -> bool:
        return self.mask == 0

    __or__ = union
    __and__ = intersection
    __sub__ = difference

    def __contains__(self, position: object) -> bool:
        return isinstance(position, Position) and self.contains(position)

    def __len__(self) -> int:
        return self.mask.bit_count()

    def __bool__(self) -> bool:
        return self.mask != 0

    def __iter__(self) -> Iterator[Position]:
        rest = self.mask
        while rest:
            top = 1 << (rest.bit_length() - 1)
            yield Position(top)
            rest ^= top

    def __reversed__(self) -> Iterator[Position]:
        rest = self.mask
        while rest:
            low = rest & -rest
            yield Position(low)
            rest ^= low

    def __repr__(self) -> str:
        cells = ", ".join(f"({p.row()}, {p.col()})" for p in reversed(self))
        return f"PositionSet({{{cells}}})"


ALL_POSITIONS = PositionSet(VALID_MASK)
