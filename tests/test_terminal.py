"""Tests for terminal conditions: three slashes and stalemate."""

import numpy as np
import pytest

from plusslash.core.board import Symbol, board_from_string, is_full
from plusslash.core.rules import (
    IllegalMoveError, apply_move, check_winner, is_legal, legal_moves, winning_line
)
from plusslash.core.state import GameState, Outcome, Phase, Player

THREAT_BOARD = """
    / / +
    | - |
    - | -
"""


def battle_state(text: str, player: Player = Player.ONE, last_move=None) -> GameState:
    return GameState(
        board=board_from_string(text),
        current_player=player,
        phase=Phase.BATTLE,
        last_move=last_move,
    )


class TestWinDetection:
    def test_three_slashes(self):
        board = board_from_string("/ / / | - | - | -")
        assert check_winner(board)
        assert winning_line(board) == (0, 1, 2)

    def test_diagonal(self):
        board = board_from_string("/ - | - / | | - /")
        assert winning_line(board) == (0, 4, 8)

    def test_plus_does_not_count(self):
        assert not check_winner(board_from_string(THREAT_BOARD))


class TestWinningMove:
    def test_promotion_wins_for_mover(self):
        state = apply_move(battle_state(THREAT_BOARD, Player.ONE, last_move=5), 2)
        assert state.is_terminal()
        assert state.outcome is Outcome.ONE_WINS
        assert state.winner is Player.ONE
        assert state.board[2] is Symbol.SLASH
        assert state.last_move == 2

    def test_either_player_can_complete_the_line(self):
        state = apply_move(battle_state(THREAT_BOARD, Player.TWO, last_move=4), 2)
        assert state.winner is Player.TWO

    def test_no_moves_after_win(self):
        state = apply_move(battle_state(THREAT_BOARD, Player.ONE), 2)
        assert legal_moves(state, Player.ONE) == []
        assert legal_moves(state, Player.TWO) == []
        with pytest.raises(IllegalMoveError, match="game is over"):
            apply_move(state, 4)

    def test_ko_blocks_winning_cell(self):
        state = battle_state(THREAT_BOARD, Player.ONE, last_move=2)
        assert not is_legal(state, 2, Player.ONE)


class TestStalemate:
    def test_only_candidate_is_ko_cell(self):
        # One crosses the center; two's only target is the fresh plus
        state = battle_state("""
            - / -
            / - /
            - / -
        """, Player.ONE, last_move=0)
        result = apply_move(state, 4)
        assert result.board[4] is Symbol.PLUS
        assert result.outcome is Outcome.DRAW
        assert result.is_terminal()
        assert result.winner is None
        assert result.last_move == 4
        assert result.phase is Phase.BATTLE

    def test_draw_checked_against_next_player(self):
        state = battle_state("""
            - / -
            / | /
            - / -
        """, Player.TWO, last_move=0)
        # Two crosses the center; one can still cross any horizontal
        result = apply_move(state, 4)
        assert result.outcome is Outcome.UNDECIDED
        assert result.current_player is Player.ONE
        assert legal_moves(result) == [0, 2, 6, 8]


def random_playouts(num_games: int, seed: int):
    """Yield (previous, move, next) triples from random games."""
    rng = np.random.default_rng(seed)
    for _ in range(num_games):
        state = GameState.new_game()
        while not state.is_terminal():
            move = int(rng.choice(legal_moves(state)))
            next_state = apply_move(state, move)
            yield state, move, next_state
            state = next_state


class TestReachableStates:
    """Invariants over states reached by random play."""

    def test_invariants(self):
        for prev, move, state in random_playouts(200, seed=7):
            # Ko
            if state.last_move is not None:
                assert not is_legal(state, state.last_move, Player.ONE)
                assert not is_legal(state, state.last_move, Player.TWO)

            # Cells never cleared
            for before, after in zip(prev.board, state.board):
                if before is not Symbol.EMPTY:
                    assert after is not Symbol.EMPTY

            # Phase never reverts and changes only when the board fills
            if prev.phase is Phase.BATTLE:
                assert state.phase is Phase.BATTLE
            elif state.phase is Phase.BATTLE:
                assert is_full(state.board)
            if state.phase is Phase.EXPANSION and not state.is_terminal():
                assert not is_full(state.board)

            player = state.current_player
            for i, cell in enumerate(state.board):
                if cell in (player.symbol, Symbol.SLASH):
                    assert not is_legal(state, i, player)
                if state.phase is Phase.EXPANSION and cell is Symbol.PLUS:
                    assert not is_legal(state, i, player)

            # Undecided states always leave the next player a move
            if not state.is_terminal():
                assert legal_moves(state)
                assert state.current_player is prev.current_player.opponent
            elif state.winner is not None:
                assert state.winner is prev.current_player

    def test_games_end_within_27_moves(self):
        # Every move upgrades one cell: empty, base, plus, slash
        rng = np.random.default_rng(11)
        for _ in range(50):
            state = GameState.new_game()
            moves = 0
            while not state.is_terminal():
                state = apply_move(state, int(rng.choice(legal_moves(state))))
                moves += 1
            assert moves <= 27
