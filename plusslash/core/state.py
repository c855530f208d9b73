"""
Game state representation for Plus-Slash.

States are immutable: the rule engine returns a fresh successor for every
accepted move, so any state can be kept around for undo/redo or search.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import (
    COLS, EMPTY_BOARD, Board, Symbol, board_to_string
)


class Player(Enum):
    """The two players. Player one moves first."""
    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE

    @property
    def symbol(self) -> Symbol:
        """Base symbol this player places during expansion."""
        return Symbol.VERTICAL if self is Player.ONE else Symbol.HORIZONTAL


class Phase(Enum):
    EXPANSION = 1  # Filling the board
    BATTLE = 2     # Board full, crossing and promoting


class Outcome(Enum):
    UNDECIDED = "undecided"
    ONE_WINS = "one_wins"
    TWO_WINS = "two_wins"
    DRAW = "draw"

    @classmethod
    def win_for(cls, player: Player) -> Outcome:
        return cls.ONE_WINS if player is Player.ONE else cls.TWO_WINS


@dataclass(frozen=True)
class GameState:
    """
    Represents the complete state of a Plus-Slash game.

    Attributes:
        board: Tuple of 9 symbols, row-major
        current_player: Player to move (on terminal states, the player who moved last)
        phase: Expansion until the board first fills, then battle
        last_move: Cell changed by the previous move; the Ko rule locks it
        outcome: Undecided until a win or stalemate
    """
    board: Board = EMPTY_BOARD
    current_player: Player = Player.ONE
    phase: Phase = Phase.EXPANSION
    last_move: Optional[int] = None
    outcome: Outcome = Outcome.UNDECIDED

    @classmethod
    def new_game(cls) -> GameState:
        """Create a new game in the starting position."""
        return cls()

    def is_terminal(self) -> bool:
        """Check if game is over."""
        return self.outcome is not Outcome.UNDECIDED

    @property
    def winner(self) -> Optional[Player]:
        """Return winner or None if drawn or still in progress."""
        if self.outcome is Outcome.ONE_WINS:
            return Player.ONE
        if self.outcome is Outcome.TWO_WINS:
            return Player.TWO
        return None

    def get_result(self, player: Player) -> float:
        """Get game result from player's perspective: 1.0=win, 0.0=loss, 0.5=draw."""
        winner = self.winner
        if winner is None:
            return 0.5  # Draw or ongoing
        return 1.0 if winner is player else 0.0

    def __repr__(self) -> str:
        """Pretty print the board."""
        lines = []
        for row, text in enumerate(board_to_string(self.board).splitlines()):
            lines.append(f"{row + 1} | {text}")
        lines.append("  +" + "-" * (COLS * 2))
        lines.append("    " + " ".join("abc"[:COLS]))

        if self.is_terminal():
            if self.winner is not None:
                lines.append(f"\nPlayer {self.winner.value} wins ({self.phase.name.lower()})")
            else:
                lines.append(f"\nDraw ({self.phase.name.lower()})")
        else:
            lines.append(
                f"\nPlayer {self.current_player.value} to move "
                f"({self.phase.name.lower()}, locked: {self.last_move})"
            )
        return "\n".join(lines)
