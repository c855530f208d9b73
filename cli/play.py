#!/usr/bin/env python3
"""
Terminal-based Plus-Slash game client.

Play against the bot, against another human, or watch bot vs bot games.
"""

from __future__ import annotations
import argparse
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from plusslash.ai.bot import Bot, BotConfig
from plusslash.config import Settings, setup_logging
from plusslash.core.board import ROWS, COLS
from plusslash.core.history import GameHistory, GameMode, HistoryError
from plusslash.core.notation import GameRecord, cell_to_name, name_to_cell
from plusslash.core.rules import legal_moves, winning_line
from plusslash.core.state import GameState, Player

HELP = """Enter a cell to play it: a name like 'b2' or an index 0-8.
  m  show legal moves
  u  undo        r  redo
  h  help        q  quit"""


def print_board(state: GameState, highlight_moves: list[int] | None = None) -> None:
    """Print the board with optional move highlighting.

    Symbols:
        | = Player 1     - = Player 2
        + = plus         / = slash (three in a line wins)
        Green = legal target, dim = Ko-locked cell, bold = winning line
    """
    # ANSI color codes
    GREEN = '\033[92m'
    DIM = '\033[2m'
    BOLD = '\033[1m'
    RESET = '\033[0m'

    targets = set(highlight_moves or [])
    line = set(winning_line(state.board) or ())

    print()
    print("    a b c")
    print("  +" + "-" * (COLS * 2 + 1) + "+")
    for row in range(ROWS):
        text = f"{row + 1} |"
        for col in range(COLS):
            cell = row * COLS + col
            sym = state.board[cell].glyph
            if cell in line:
                text += f" {BOLD}{sym}{RESET}"
            elif cell in targets:
                text += f" {GREEN}{sym}{RESET}"
            elif cell == state.last_move:
                text += f" {DIM}{sym}{RESET}"
            else:
                text += f" {sym}"
        text += " |"
        print(text)
    print("  +" + "-" * (COLS * 2 + 1) + "+")
    print(f"  {state.phase.name.lower()} phase")
    print()


def parse_user_move(state: GameState, input_str: str) -> int | str | None:
    """Parse user input into a move or command."""
    input_str = input_str.strip().lower()

    # Check for special commands
    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'
    if input_str in ['m', 'moves']:
        return 'show_moves'
    if input_str in ['u', 'undo']:
        return 'undo'
    if input_str in ['r', 'redo']:
        return 'redo'

    try:
        move = name_to_cell(input_str)
    except ValueError:
        print(f"Invalid format: {input_str}. Use a cell like 'b2' or an index 0-8")
        return None

    if move in legal_moves(state):
        return move
    print(f"Illegal move: {input_str}")
    return None


def show_legal_moves(state: GameState) -> None:
    """Display all legal moves."""
    moves = legal_moves(state)
    if not moves:
        print("No legal moves!")
        return
    print("Legal moves:", ", ".join(f"{cell_to_name(m)} ({m})" for m in moves))


def print_result(state: GameState, human: Player | None = None) -> None:
    winner = state.winner
    if winner is None:
        print("Game drawn: no legal moves left.")
    elif human is None:
        print(f"Player {winner.value} wins!")
    elif winner is human:
        print("Congratulations! You win!")
    else:
        print("Bot wins. Better luck next time!")


def human_turn(history: GameHistory, human: Player | None = None) -> bool:
    """
    Read commands until a move is played. Returns False to quit.

    Against the bot, undo or redo can land on the bot's turn; the turn then
    ends without a move so the caller lets the bot play.
    """
    while True:
        state = history.current
        try:
            user_input = input("> ").strip()
        except EOFError:
            return False

        result = parse_user_move(state, user_input)

        if result == 'quit':
            print("Thanks for playing!")
            return False
        elif result == 'help':
            print(HELP)
        elif result == 'show_moves':
            show_legal_moves(state)
        elif result in ('undo', 'redo'):
            try:
                new_state = history.undo() if result == 'undo' else history.redo()
            except HistoryError as e:
                print(e)
                continue
            print("Move undone." if result == 'undo' else "Move redone.")
            print_board(new_state, legal_moves(new_state))
            if human is not None and (new_state.is_terminal() or new_state.current_player is not human):
                return True
        elif result is not None:
            history.play(result)
            print(f"You played: {cell_to_name(result)}")
            return True


def play_human_vs_bot(bot: Bot, human_player: Player = Player.ONE) -> GameHistory:
    """Play a game: human vs bot."""
    history = GameHistory(GameMode.PVE)

    print("\n=== Plus-Slash ===")
    print("You are", "| (player 1)" if human_player is Player.ONE else "- (player 2)")
    print(HELP)
    print("Goal: fill the board, then make three slashes (/) in a line!")

    while not history.current.is_terminal():
        state = history.current
        player = state.current_player

        if player is human_player:
            print_board(state, legal_moves(state))
            print(f"Your turn (Player {player.value})")
            if not human_turn(history, human_player):
                return history
        else:
            bot_move = bot.select_move(state)
            if bot_move is None:
                break

            # Show analysis
            if bot_move.search is not None:
                print("Bot analysis:")
                for m in bot_move.search.ranked(top_k=3):
                    print(f"  {m['cell']}: score={m['score']:.0f}")

            history.play(bot_move.index)
            print(f"Bot plays: {cell_to_name(bot_move.index)} ({bot_move.source})")

    print_board(history.current)
    print_result(history.current, human_player)
    return history


def play_human_vs_human() -> GameHistory:
    """Two humans at one terminal."""
    history = GameHistory(GameMode.PVP)

    print("\n=== Plus-Slash: two players ===")
    print(HELP)

    while not history.current.is_terminal():
        state = history.current
        print_board(state, legal_moves(state))
        print(f"Player {state.current_player.value} ({state.current_player.symbol.glyph}) to move")
        if not human_turn(history):
            return history

    print_board(history.current)
    print_result(history.current)
    return history


def watch_bot_vs_bot(bot_one: Bot, bot_two: Bot, delay: float = 1.0) -> GameHistory:
    """Watch two bots play each other."""
    history = GameHistory(GameMode.PVP)
    bots = {Player.ONE: bot_one, Player.TWO: bot_two}

    print("\n=== Bot vs Bot ===")

    while not history.current.is_terminal():
        state = history.current
        print_board(state)
        print(f"Move {len(history.moves) + 1}, Player {state.current_player.value}")

        bot_move = bots[state.current_player].select_move(state)
        if bot_move is None:
            break
        history.play(bot_move.index)
        print(f"Plays: {cell_to_name(bot_move.index)} ({bot_move.source})\n")

        time.sleep(delay)

    print_board(history.current)
    print(f"Game over after {len(history.moves)} moves.")
    print_result(history.current)
    return history


def main():
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description='Plus-Slash Terminal Client')
    parser.add_argument('--mode', choices=['pve', 'pvp', 'watch'], default='pve',
                        help='Human vs bot, human vs human, or bot vs bot')
    parser.add_argument('--depth', type=int, default=settings.search_depth, help='Search depth (plies)')
    parser.add_argument('--play-as', type=int, choices=[1, 2], default=1,
                        help='Play as player 1 (|) or 2 (-)')
    parser.add_argument('--advisor', action='store_true', help='Ask the LLM advisor before searching')
    parser.add_argument('--delay', type=float, default=1.0, help='Seconds between moves when watching')
    parser.add_argument('--record', action='store_true', help='Print the game record at the end')
    parser.add_argument('--log-level', type=str, default=settings.log_level, help='Logging level')

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.depth < 1:
        parser.error("--depth must be at least 1")

    advisor = settings.make_advisor() if args.advisor else None
    config = BotConfig(depth=args.depth, use_advisor=advisor is not None)

    if args.mode == 'watch':
        history = watch_bot_vs_bot(Bot(config, advisor), Bot(config, advisor), args.delay)
    elif args.mode == 'pvp':
        history = play_human_vs_human()
    else:
        history = play_human_vs_bot(Bot(config, advisor), Player(args.play_as))

    if args.record:
        print()
        print(GameRecord.from_moves(history.moves).to_text())


if __name__ == '__main__':
    main()
