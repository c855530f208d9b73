"""Core game logic: board, state, rules, history and notation."""

from .board import *
from .state import GameState, Outcome, Phase, Player
from .rules import IllegalMoveError, apply_move, is_legal, legal_moves
