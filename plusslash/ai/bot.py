"""
Automated player: advisor first, then search, then a random legal move.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import numpy as np

from ..core.rules import is_legal
from ..core.state import GameState
from .advisor import MoveAdvisor
from .search import MinimaxSearch, SearchConfig, SearchResult, random_move

logger = logging.getLogger(__name__)


@dataclass
class BotConfig:
    """Configuration for the bot."""
    depth: int = 3
    use_search: bool = True
    use_advisor: bool = False


@dataclass
class BotMove:
    index: int
    source: str  # "advisor", "search" or "random"
    search: Optional[SearchResult] = None  # Set when the move came from search


class Bot:
    """Picks moves for one side of a game."""

    def __init__(
        self,
        config: Optional[BotConfig] = None,
        advisor: Optional[MoveAdvisor] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or BotConfig()
        self.advisor = advisor
        self.rng = rng if rng is not None else np.random.default_rng()
        self.search = MinimaxSearch(SearchConfig(depth=self.config.depth))

    def select_move(self, state: GameState) -> Optional[BotMove]:
        """Return a legal move for the player to move, or None if there is none."""
        player = state.current_player

        if self.config.use_advisor and self.advisor is not None:
            move = self.advisor.suggest(state)
            if move is not None and is_legal(state, move, player):
                logger.info(f"Player {player.value} plays {move} (advisor)")
                return BotMove(move, "advisor")

        if self.config.use_search:
            result = self.search.search(state)
            move = result.best_move
            if move is not None:
                logger.info(f"Player {player.value} plays {move} (search, {result.nodes} nodes)")
                return BotMove(move, "search", result)

        move = random_move(state, self.rng)
        if move is None:
            logger.info(f"Player {player.value} has no legal move")
            return None
        logger.info(f"Player {player.value} plays {move} (random)")
        return BotMove(move, "random")
