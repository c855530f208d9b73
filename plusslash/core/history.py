"""
In-memory undo/redo history for a single game.

The history is a linear list of states with a cursor. Playing a move while
the cursor is behind the end discards the redo tail.
"""

from __future__ import annotations
from enum import Enum

from .rules import apply_move
from .state import GameState


class GameMode(Enum):
    PVP = "pvp"  # Two humans: undo/redo one ply
    PVE = "pve"  # Human vs bot: undo/redo a full round (human move + bot reply)


class HistoryError(ValueError):
    """Raised when undo or redo is not possible."""


class GameHistory:
    """Linear game history with a cursor."""

    def __init__(self, mode: GameMode = GameMode.PVP):
        self.mode = mode
        self.states: list[GameState] = [GameState.new_game()]
        self.step = 0

    @property
    def current(self) -> GameState:
        return self.states[self.step]

    @property
    def stride(self) -> int:
        return 1 if self.mode is GameMode.PVP else 2

    @property
    def moves(self) -> list[int]:
        """Cells played to reach the current state."""
        return [state.last_move for state in self.states[1:self.step + 1]]

    @property
    def can_undo(self) -> bool:
        return self.step > 0 and not self.current.is_terminal()

    @property
    def can_redo(self) -> bool:
        return self.step < len(self.states) - 1 and not self.current.is_terminal()

    def play(self, index: int) -> GameState:
        """
        Apply a move for the player to move and record it.

        Raises:
            IllegalMoveError: if the move is not legal; history is unchanged.
        """
        new_state = apply_move(self.current, index)
        del self.states[self.step + 1:]
        self.states.append(new_state)
        self.step += 1
        return new_state

    def undo(self) -> GameState:
        if self.current.is_terminal():
            raise HistoryError("Game is over")
        if self.step == 0:
            raise HistoryError("Nothing to undo")
        self.step = max(0, self.step - self.stride)
        return self.current

    def redo(self) -> GameState:
        if self.current.is_terminal():
            raise HistoryError("Game is over")
        if self.step >= len(self.states) - 1:
            raise HistoryError("Nothing to redo")
        self.step = min(len(self.states) - 1, self.step + self.stride)
        return self.current

    def reset(self) -> GameState:
        self.states = [GameState.new_game()]
        self.step = 0
        return self.current

    def __len__(self) -> int:
        return len(self.states)
