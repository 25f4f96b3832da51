"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Coordinates follow a fixed board orientation: x is the file (a-h -> 0-7), y counts rows from Black's back rank
(rank 8 -> 0, rank 1 -> 7). White starts on rows 6-7 and advances toward decreasing y.
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    x: int
    y: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' -> (0, 0), 'h1' -> (7, 7)"""
        x = ord(sq[0]) - ord("a")
        y = BOARD_DIMENSIONS[1] - int(sq[1:])
        return cls(x, y)

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{BOARD_DIMENSIONS[1] - self.y}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])

    def offset(self, dx: int, dy: int) -> Square:
        """NOTE: may step off the board. Callers check `is_within_bounds()`"""
        return Square(self.x + dx, self.y + dy)
