#!/usr/bin/env python3
"""
Bot Arena - Compare bot settings by having them play against each other.

A bot is given as a search depth ("3") or "random" for the uniform
random fallback player.
"""

import argparse
import sys
from pathlib import Path
from dataclasses import dataclass
import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from plusslash.ai.bot import Bot, BotConfig
from plusslash.config import setup_logging
from plusslash.core.rules import apply_move
from plusslash.core.state import GameState, Player

# Every move upgrades a cell (empty -> base -> plus -> slash), so games end
MAX_MOVES = 27


@dataclass
class MatchResult:
    bot1_wins: int = 0
    bot2_wins: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.bot1_wins + self.bot2_wins + self.draws

    def bot1_win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.bot1_wins / self.total

    def bot2_win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.bot2_wins / self.total


def make_bot(name: str, rng: np.random.Generator) -> Bot:
    """Build a bot from a depth or 'random'."""
    if name == 'random':
        return Bot(BotConfig(use_search=False), rng=rng)
    depth = int(name)
    if depth < 1:
        raise ValueError(f"Depth must be at least 1, got {depth}")
    return Bot(BotConfig(depth=depth), rng=rng)


def play_game(bot1: Bot, bot2: Bot, verbose: bool = False) -> int:
    """
    Play a single game, bot1 as player one.

    Returns:
        1 if bot1 wins, -1 if bot2 wins, 0 for draw
    """
    state = GameState.new_game()
    bots = {Player.ONE: bot1, Player.TWO: bot2}

    for move_count in range(1, MAX_MOVES + 1):
        if state.is_terminal():
            break
        bot_move = bots[state.current_player].select_move(state)
        if bot_move is None:
            break
        mover = state.current_player
        state = apply_move(state, bot_move.index)

        if verbose:
            print(f"Move {move_count}: Player {mover.value} plays {bot_move.index} ({bot_move.source})")

    winner = state.winner
    if winner is Player.ONE:
        return 1
    if winner is Player.TWO:
        return -1
    return 0


def run_match(bot1: Bot, bot2: Bot, num_games: int = 20, verbose: bool = False) -> MatchResult:
    """
    Run a match between two bots.
    Each bot plays as both player one and player two.
    """
    result = MatchResult()
    games_per_side = num_games // 2

    print(f"\nPlaying {games_per_side} games with Bot 1 as player one...")
    for i in range(games_per_side):
        outcome = play_game(bot1, bot2, verbose=verbose)
        if outcome == 1:
            result.bot1_wins += 1
        elif outcome == -1:
            result.bot2_wins += 1
        else:
            result.draws += 1

    print(f"Playing {games_per_side} games with Bot 2 as player one...")
    for i in range(games_per_side):
        outcome = play_game(bot2, bot1, verbose=verbose)
        if outcome == 1:
            result.bot2_wins += 1
        elif outcome == -1:
            result.bot1_wins += 1
        else:
            result.draws += 1

    return result


def main():
    parser = argparse.ArgumentParser(description='Compare bots by having them play against each other')
    parser.add_argument('bot1', type=str, help="Search depth or 'random'")
    parser.add_argument('bot2', type=str, help="Search depth or 'random'")
    parser.add_argument('--games', type=int, default=20, help='Number of games to play (default: 20)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for random moves')
    parser.add_argument('--verbose', action='store_true', help='Print moves')
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level (default: WARNING)')

    args = parser.parse_args()
    setup_logging(args.log_level.upper())

    rng = np.random.default_rng(args.seed)
    try:
        bot1 = make_bot(args.bot1, rng)
        bot2 = make_bot(args.bot2, rng)
    except ValueError as e:
        parser.error(str(e))

    result = run_match(bot1, bot2, num_games=args.games, verbose=args.verbose)

    print("\n" + "=" * 50)
    print("MATCH RESULTS")
    print("=" * 50)
    print(f"Bot 1: {args.bot1}")
    print(f"Bot 2: {args.bot2}")
    print(f"Games played: {result.total}")
    print(f"Bot 1 wins: {result.bot1_wins} ({result.bot1_win_rate()*100:.1f}%)")
    print(f"Bot 2 wins: {result.bot2_wins} ({result.bot2_win_rate()*100:.1f}%)")
    print(f"Draws: {result.draws}")
    print("=" * 50)


if __name__ == '__main__':
    main()
