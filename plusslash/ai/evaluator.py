"""
Static position evaluation for the minimax search.

Scores are from the perspective of one player: positive is good for them.
"""

from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from ..core.board import WINNING_LINES, Symbol
from ..core.state import GameState, Outcome, Player

# Cell codes for vectorised counting
CODES = {
    Symbol.EMPTY: 0,
    Symbol.VERTICAL: 1,
    Symbol.HORIZONTAL: 2,
    Symbol.PLUS: 3,
    Symbol.SLASH: 4,
}

LINES = np.array(WINNING_LINES, dtype=np.intp)  # (8, 3)


@dataclass(frozen=True)
class EvalWeights:
    """Weights for the static evaluator."""
    win: int = 1000          # Terminal win (negated for a loss)
    threat: int = 50         # Line with two slashes and one plus
    full_line: int = 1000    # Line with three slashes
    own_symbol: int = 5
    opponent_symbol: int = -5
    plus: int = 2
    slash: int = 10


DEFAULT_WEIGHTS = EvalWeights()


def encode_board(state: GameState) -> np.ndarray:
    """Board as an int8 array of cell codes."""
    return np.fromiter((CODES[cell] for cell in state.board), dtype=np.int8, count=len(state.board))


def evaluate(state: GameState, player: Player, weights: EvalWeights = DEFAULT_WEIGHTS) -> int:
    """
    Score a state for player.

    Terminal states score +/-win or 0 for a draw. Otherwise the score sums
    line threats and per-cell material.

    Note: the threat term counts any line with two slashes and one plus,
    whoever is about to complete it. The search relies on this exact
    scoring, so a turn-aware version would change which moves it picks.
    """
    if state.outcome is Outcome.DRAW:
        return 0
    if state.is_terminal():
        return weights.win if state.winner is player else -weights.win

    cells = encode_board(state)
    lines = cells[LINES]

    slashes = (lines == CODES[Symbol.SLASH]).sum(axis=1)
    pluses = (lines == CODES[Symbol.PLUS]).sum(axis=1)

    score = weights.threat * int(np.count_nonzero((slashes == 2) & (pluses == 1)))
    score += weights.full_line * int(np.count_nonzero(slashes == 3))

    own = CODES[player.symbol]
    opponent = CODES[player.opponent.symbol]
    score += weights.own_symbol * int(np.count_nonzero(cells == own))
    score += weights.opponent_symbol * int(np.count_nonzero(cells == opponent))
    score += weights.plus * int(np.count_nonzero(cells == CODES[Symbol.PLUS]))
    score += weights.slash * int(np.count_nonzero(cells == CODES[Symbol.SLASH]))

    return score
