"""
Move legality and state transitions for Plus-Slash.

Both the legality predicate and the transition function read the same
table, keyed by phase and by what the target cell holds relative to the
mover. A move is legal exactly when the table has an entry for it.
"""

from __future__ import annotations
from dataclasses import replace
from enum import Enum
from typing import Optional

from .board import (
    NUM_CELLS, WINNING_LINES, Board, Symbol, is_full, is_valid_cell
)
from .state import GameState, Outcome, Phase, Player


class IllegalMoveError(ValueError):
    """Raised when a move is applied that the rules do not allow."""


class Relation(Enum):
    """What a cell holds, seen from the player about to move."""
    EMPTY = "empty"
    OWN = "own"
    OPPONENT = "opponent"
    PLUS = "plus"
    SLASH = "slash"


# (phase, relation of target cell) -> what the cell becomes
TRANSITIONS: dict[tuple[Phase, Relation], Relation] = {
    (Phase.EXPANSION, Relation.EMPTY): Relation.OWN,
    (Phase.EXPANSION, Relation.OPPONENT): Relation.PLUS,
    (Phase.BATTLE, Relation.PLUS): Relation.SLASH,
    (Phase.BATTLE, Relation.OPPONENT): Relation.PLUS,
}


def relation(symbol: Symbol, player: Player) -> Relation:
    """Classify a cell's symbol relative to player."""
    if symbol is Symbol.EMPTY:
        return Relation.EMPTY
    if symbol is Symbol.PLUS:
        return Relation.PLUS
    if symbol is Symbol.SLASH:
        return Relation.SLASH
    if symbol is player.symbol:
        return Relation.OWN
    return Relation.OPPONENT


def _resolve(target: Relation, player: Player) -> Symbol:
    if target is Relation.OWN:
        return player.symbol
    if target is Relation.PLUS:
        return Symbol.PLUS
    return Symbol.SLASH


def resulting_symbol(state: GameState, index: int, player: Player) -> Optional[Symbol]:
    """
    Symbol that would appear at index if player moved there, or None if illegal.

    Rejects terminal states, off-board indices and the Ko-locked cell
    (the one changed by the previous move, in either phase).
    """
    if state.is_terminal():
        return None
    if not is_valid_cell(index):
        return None
    if index == state.last_move:
        return None

    target = TRANSITIONS.get((state.phase, relation(state.board[index], player)))
    if target is None:
        return None
    return _resolve(target, player)


def is_legal(state: GameState, index: int, player: Player) -> bool:
    """Check whether player may move at index."""
    return resulting_symbol(state, index, player) is not None


def legal_moves(state: GameState, player: Optional[Player] = None) -> list[int]:
    """All legal cells for player (default: the player to move), ascending."""
    if player is None:
        player = state.current_player
    return [i for i in range(NUM_CELLS) if is_legal(state, i, player)]


def winning_line(board: Board) -> Optional[tuple[int, int, int]]:
    """Return the first line of three slashes, if any."""
    for line in WINNING_LINES:
        if all(board[i] is Symbol.SLASH for i in line):
            return line
    return None


def check_winner(board: Board) -> bool:
    """True if any line holds three slashes."""
    return winning_line(board) is not None


def apply_move(state: GameState, index: int) -> GameState:
    """
    Apply a move for the player to move and return the successor state.

    Order of checks on the new board:
      1. Three slashes in a line: the mover wins, nothing else is checked.
      2. Board full during expansion: switch to battle.
      3. Next player has no legal move on the new state: draw.

    Raises:
        IllegalMoveError: if the move is not legal for the player to move.
    """
    mover = state.current_player
    new_symbol = resulting_symbol(state, index, mover)
    if new_symbol is None:
        raise IllegalMoveError(_describe_illegal(state, index, mover))

    new_board = state.board[:index] + (new_symbol,) + state.board[index + 1:]

    if check_winner(new_board):
        return replace(
            state,
            board=new_board,
            last_move=index,
            outcome=Outcome.win_for(mover),
        )

    new_phase = state.phase
    if new_phase is Phase.EXPANSION and is_full(new_board):
        new_phase = Phase.BATTLE

    next_state = GameState(
        board=new_board,
        current_player=mover.opponent,
        phase=new_phase,
        last_move=index,
        outcome=Outcome.UNDECIDED,
    )

    # Legality depends on the new phase and the new Ko cell
    if not any(is_legal(next_state, i, next_state.current_player) for i in range(NUM_CELLS)):
        return replace(next_state, current_player=mover, outcome=Outcome.DRAW)

    return next_state


def _describe_illegal(state: GameState, index: int, player: Player) -> str:
    prefix = f"Player {player.value} cannot move at {index}"
    if state.is_terminal():
        return f"{prefix}: game is over ({state.outcome.value})"
    if not is_valid_cell(index):
        return f"{prefix}: cell out of range 0-{NUM_CELLS - 1}"
    if index == state.last_move:
        return f"{prefix}: cell was changed by the previous move"
    symbol = state.board[index]
    return f"{prefix}: {symbol.value} cell is not playable in {state.phase.name.lower()}"
