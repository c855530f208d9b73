"""
Board utilities for Plus-Slash.

Board layout (3 rows x 3 cols = 9 cells, row-major):

  1 | 0 1 2
  2 | 3 4 5
  3 | 6 7 8
    +------
      a b c

Cell index = row * 3 + col (row 0 = row 1 at the top, col 0 = column a)
"""

from __future__ import annotations
from enum import Enum


class Symbol(Enum):
    """What a single cell holds."""
    EMPTY = "empty"
    VERTICAL = "vertical"      # Player one's base symbol  |
    HORIZONTAL = "horizontal"  # Player two's base symbol  -
    PLUS = "plus"              # Base symbol crossed by the opponent
    SLASH = "slash"            # Promoted plus, never changes again

    @property
    def glyph(self) -> str:
        return GLYPHS[self]


# Board dimensions
ROWS = 3
COLS = 3
NUM_CELLS = ROWS * COLS  # 9

GLYPHS = {
    Symbol.EMPTY: ".",
    Symbol.VERTICAL: "|",
    Symbol.HORIZONTAL: "-",
    Symbol.PLUS: "+",
    Symbol.SLASH: "/",
}
GLYPH_TO_SYMBOL = {glyph: symbol for symbol, glyph in GLYPHS.items()}

Board = tuple[Symbol, ...]

EMPTY_BOARD: Board = (Symbol.EMPTY,) * NUM_CELLS

# Three slashes on any of these wins
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # Rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # Cols
    (0, 4, 8), (2, 4, 6),             # Diagonals
)

# Static move ordering for search: center, corners, edges
MOVE_ORDER: tuple[int, ...] = (4, 0, 2, 6, 8, 1, 3, 5, 7)
MOVE_PRIORITY = {cell: rank for rank, cell in enumerate(MOVE_ORDER)}


def is_valid_cell(cell: int) -> bool:
    """Check if a cell index is on the board."""
    return 0 <= cell < NUM_CELLS


def cell_to_rowcol(cell: int) -> tuple[int, int]:
    """Convert cell index to (row, col)."""
    return cell // COLS, cell % COLS


def rowcol_to_cell(row: int, col: int) -> int:
    """Convert (row, col) to cell index."""
    return row * COLS + col


def is_full(board: Board) -> bool:
    """True when no cell is empty."""
    return all(cell is not Symbol.EMPTY for cell in board)


def board_from_string(text: str) -> Board:
    """
    Parse a board from its glyphs, whitespace ignored.

    Example:
        board_from_string('''
            / / +
            | - |
            - | -
        ''')
    """
    glyphs = [ch for ch in text if not ch.isspace()]
    if len(glyphs) != NUM_CELLS:
        raise ValueError(f"Expected {NUM_CELLS} cells, got {len(glyphs)}: {text!r}")
    try:
        return tuple(GLYPH_TO_SYMBOL[ch] for ch in glyphs)
    except KeyError as e:
        raise ValueError(f"Unknown cell glyph {e.args[0]!r}") from None


def board_to_string(board: Board) -> str:
    """Render a board as three lines of glyphs."""
    rows = []
    for row in range(ROWS):
        cells = board[row * COLS:(row + 1) * COLS]
        rows.append(" ".join(cell.glyph for cell in cells))
    return "\n".join(rows)
