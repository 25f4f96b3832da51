"""
Piece placement strings.

Only the first field of a FEN string (the board position) is used: it is a compact way to set up a board for a
new game or a test.
ex. standard starting position:
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
means:
* black pieces are on the 8th rank (row 0), starting with rook on a8
* pawns cover 7th rank entirely
* ranks 6 through 3 have 8 consecutive empty squares
* rank 2 are the white pawns (capital letters)
* 1st rank (row 7) are the white pieces.
"""

from neon_chess.chess.pieces import FEN_TO_PIECE
from neon_chess.chess.square import BOARD_DIMENSIONS

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_PLACEMENT = "/".join(["8"] * BOARD_DIMENSIONS[1])


def is_valid_placement(placement: str) -> bool:
    """Eight ranks separated by '/', each adding up to eight files of piece letters and empty-square digits."""
    num_files, num_ranks = BOARD_DIMENSIONS
    ranks = placement.split("/")
    return len(ranks) == num_ranks and all(_rank_width(rank) == num_files for rank in ranks)


def _rank_width(rank: str) -> int | None:
    """Number of files one rank covers, None as soon as an unknown character shows up"""
    width = 0
    for character in rank:
        if character in "12345678":
            width += int(character)
        elif character.lower() in FEN_TO_PIECE:
            width += 1
        else:
            return None
    return width


def has_one_king_per_side(placement: str) -> bool:
    return placement.count("K") == 1 and placement.count("k") == 1
