"""
Minimax search with alpha-beta pruning for Plus-Slash.

The search has no board model of its own: moves come from the rule
engine's legality predicate and positions from its transition function.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging
import math
import time
import numpy as np

from ..core.board import MOVE_PRIORITY, NUM_CELLS
from ..core.notation import cell_to_name
from ..core.rules import apply_move, is_legal, legal_moves
from ..core.state import GameState, Player
from .evaluator import DEFAULT_WEIGHTS, EvalWeights, evaluate

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for minimax search."""
    depth: int = 3  # Plies, counting the root move
    order_moves: bool = True  # Center, corners, edges at the root
    weights: EvalWeights = DEFAULT_WEIGHTS

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {self.depth}")


@dataclass
class SearchResult:
    """Outcome of a root search."""
    best_move: Optional[int]
    best_score: float
    scores: dict[int, float] = field(default_factory=dict)  # Root move -> score, in search order
    nodes: int = 0
    elapsed: float = 0.0

    def ranked(self, top_k: int = 3) -> list[dict]:
        """Root moves sorted by score, best first."""
        ranked = sorted(self.scores.items(), key=lambda item: -item[1])
        return [
            {'move': move, 'cell': cell_to_name(move), 'score': score}
            for move, score in ranked[:top_k]
        ]


class MinimaxSearch:
    """
    Depth-limited minimax with alpha-beta pruning.

    The root player maximizes; the opponent minimizes on alternate plies.
    Each root move is searched with a fresh window, so every root score is
    exact and ties go to the earlier move in search order.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.nodes = 0

    def order(self, moves: list[int]) -> list[int]:
        if not self.config.order_moves:
            return list(moves)
        return sorted(moves, key=MOVE_PRIORITY.__getitem__)

    def search(self, state: GameState) -> SearchResult:
        """Score every legal root move and pick the best."""
        start = time.time()
        self.nodes = 0

        root_player = state.current_player
        result = SearchResult(best_move=None, best_score=-math.inf)

        for move in self.order(legal_moves(state, root_player)):
            child = apply_move(state, move)
            score = self.minimax(
                child, self.config.depth - 1, False, -math.inf, math.inf, root_player
            )
            result.scores[move] = score
            if score > result.best_score:
                result.best_score = score
                result.best_move = move

        result.nodes = self.nodes
        result.elapsed = time.time() - start
        logger.debug(
            f"depth={self.config.depth} nodes={result.nodes} best={result.best_move} "
            f"score={result.best_score} ({result.elapsed * 1000:.1f} ms)"
        )
        return result

    def minimax(
        self,
        state: GameState,
        depth: int,
        is_maximizing: bool,
        alpha: float,
        beta: float,
        root_player: Player,
    ) -> float:
        """
        Minimax value of state for root_player.

        Args:
            state: Position to evaluate
            depth: Remaining plies
            is_maximizing: True when root_player is on move
            alpha: Best score the maximizer can already force
            beta: Best score the minimizer can already force
            root_player: Player whose perspective scores are from
        """
        self.nodes += 1

        if depth == 0 or state.is_terminal():
            return evaluate(state, root_player, self.config.weights)

        mover = root_player if is_maximizing else root_player.opponent
        moves = [i for i in range(NUM_CELLS) if is_legal(state, i, mover)]

        # No moves: leaf, without going through the transition function
        if not moves:
            return evaluate(state, root_player, self.config.weights)

        if is_maximizing:
            max_eval = -math.inf
            for move in moves:
                score = self.minimax(apply_move(state, move), depth - 1, False, alpha, beta, root_player)
                max_eval = max(max_eval, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_eval
        else:
            min_eval = math.inf
            for move in moves:
                score = self.minimax(apply_move(state, move), depth - 1, True, alpha, beta, root_player)
                min_eval = min(min_eval, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_eval

    def analyze(self, state: GameState, top_k: int = 3) -> list[dict]:
        """Root moves sorted by score, best first."""
        return self.search(state).ranked(top_k)


def choose_move(state: GameState, depth: int = 3) -> Optional[int]:
    """
    Pick a move for the player to move, or None if there is none.

    The returned cell always passes is_legal for state.current_player.
    """
    return MinimaxSearch(SearchConfig(depth=depth)).search(state).best_move


def random_move(state: GameState, rng: Optional[np.random.Generator] = None) -> Optional[int]:
    """Uniformly random legal move for the player to move, or None."""
    moves = legal_moves(state)
    if not moves:
        return None
    if rng is None:
        rng = np.random.default_rng()
    return int(rng.choice(moves))
