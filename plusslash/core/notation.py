"""
Game notation for Plus-Slash (PGN-like format).

Format example:
```
[Event "Casual Game"]
[Date "2026.10.19"]
[PlayerOne "Human"]
[PlayerTwo "Bot (depth 3)"]
[Result "1-0"]

1. b2 a1 2. c1 b1 3. a2 ...
1-0
```

Cells are named by column (a-c, left to right) and row (1-3, top to
bottom): a1 is cell 0, c1 is cell 2, c3 is cell 8. A move is just the
cell it targets; what happens there follows from the rules.

Move numbers increment after both players have moved (like chess).
"""

from __future__ import annotations
import re
from datetime import date
from dataclasses import dataclass, field

from .board import COLS, ROWS, cell_to_rowcol, is_valid_cell, rowcol_to_cell
from .rules import apply_move
from .state import GameState, Outcome

FILES = "abc"[:COLS]

RESULT_BY_OUTCOME = {
    Outcome.UNDECIDED: "*",
    Outcome.ONE_WINS: "1-0",
    Outcome.TWO_WINS: "0-1",
    Outcome.DRAW: "1/2-1/2",
}

TAG_PATTERN = r'\[(\w+)\s+"([^"]*)"\]'
RESULT_PATTERN = r'\s*(1-0|0-1|1/2-1/2|\*)\s*$'


def cell_to_name(cell: int) -> str:
    """Convert cell index to a name like 'b2'."""
    if not is_valid_cell(cell):
        raise ValueError(f"Invalid cell: {cell}")
    row, col = cell_to_rowcol(cell)
    return f"{FILES[col]}{row + 1}"


def name_to_cell(name: str) -> int:
    """Parse a cell name ('b2') or a bare index ('4')."""
    text = name.strip().lower()
    if text.isdigit():
        cell = int(text)
        if is_valid_cell(cell):
            return cell
        raise ValueError(f"Invalid cell: {name}")

    if len(text) != 2 or text[0] not in FILES or not text[1].isdigit():
        raise ValueError(f"Invalid cell: {name}")
    row = int(text[1]) - 1
    if not 0 <= row < ROWS:
        raise ValueError(f"Invalid cell: {name}")
    return rowcol_to_cell(row, FILES.index(text[0]))


@dataclass
class GameRecord:
    """Record of a complete or in-progress game."""

    # Metadata (PGN-style tags)
    event: str = "Plus-Slash Game"
    date: str = field(default_factory=lambda: date.today().strftime("%Y.%m.%d"))
    player_one: str = "Player 1"
    player_two: str = "Player 2"
    result: str = "*"

    # Cells played, in order
    moves: list[int] = field(default_factory=list)

    @classmethod
    def from_moves(cls, moves: list[int], **metadata) -> GameRecord:
        """Create a record from a move list, validating it by replay."""
        record = cls(moves=list(moves), **metadata)
        record.result = RESULT_BY_OUTCOME[record.replay()[-1].outcome]
        return record

    def to_text(self) -> str:
        """Export to PGN-like format."""
        lines = [
            f'[Event "{self.event}"]',
            f'[Date "{self.date}"]',
            f'[PlayerOne "{self.player_one}"]',
            f'[PlayerTwo "{self.player_two}"]',
            f'[Result "{self.result}"]',
            '',
        ]

        parts = []
        for ply, move in enumerate(self.moves):
            name = cell_to_name(move)
            if ply % 2 == 0:
                parts.append(f"{ply // 2 + 1}. {name}")
            else:
                parts.append(name)
        if parts:
            lines.append(' '.join(parts))

        if self.result != "*":
            lines.append(self.result)

        return '\n'.join(lines)

    @classmethod
    def from_text(cls, text: str) -> GameRecord:
        """
        Parse PGN-like format and validate the moves by replaying them.

        Raises:
            ValueError: on an unreadable token
            IllegalMoveError: on a move the rules reject
        """
        record = cls()

        tags = {tag.lower(): value for tag, value in re.findall(TAG_PATTERN, text)}
        record.event = tags.get('event', record.event)
        record.date = tags.get('date', record.date)
        record.player_one = tags.get('playerone', record.player_one)
        record.player_two = tags.get('playertwo', record.player_two)

        move_text = re.sub(TAG_PATTERN, '', text)
        move_text = re.sub(RESULT_PATTERN, '', move_text)

        for token in move_text.split():
            # Skip move numbers like "1." or "12."
            if re.match(r'^\d+\.$', token):
                continue
            record.moves.append(name_to_cell(token))

        record.result = RESULT_BY_OUTCOME[record.replay()[-1].outcome]
        return record

    def replay(self) -> list[GameState]:
        """Replay all moves and return every state, starting from the new game."""
        states = [GameState.new_game()]
        for move in self.moves:
            states.append(apply_move(states[-1], move))
        return states
