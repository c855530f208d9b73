"""
HTTP client for an LLM move advisor.

The advisor is consulted before the search. Whatever it returns is checked
against the rules; an unusable answer or any network failure yields None
so the caller can fall back to the search bot.
"""

from __future__ import annotations
import json
import logging
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.rules import is_legal
from ..core.state import GameState, Phase, Player

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SIDE_NAMES = {
    Player.ONE: "VERTICAL (|)",
    Player.TWO: "HORIZONTAL (-)",
}


class MoveAdvisor(Protocol):
    """Anything that can suggest a cell for the player to move."""
    def suggest(self, state: GameState) -> Optional[int]:
        ...


def build_prompt(state: GameState) -> str:
    """Describe the position for the model."""
    board = ", ".join(f"{i}:{cell.name}" for i, cell in enumerate(state.board))
    phase = "EXPANSION" if state.phase is Phase.EXPANSION else "BATTLE"
    return (
        'You are an expert player in "Plus-Slash".\n'
        f"Board: [{board}]\n"
        f"Phase: {phase}\n"
        f"You are: {SIDE_NAMES[state.current_player]}\n"
        f"Opponent: {SIDE_NAMES[state.current_player.opponent]}\n"
        f"Locked cell (Ko rule): {state.last_move}\n"
        "\n"
        "Strategy: Fill board in Expansion. In Battle, connect 3 Slashes (/).\n"
        'Return move index (0-8) as JSON: {"move": index}\n'
    )


def parse_move(payload: dict) -> Optional[int]:
    """Pull the suggested index out of a generateContent response."""
    text = payload["candidates"][0]["content"]["parts"][0]["text"]
    move = json.loads(text or "{}").get("move")
    # bool is an int subclass
    if isinstance(move, int) and not isinstance(move, bool):
        return move
    return None


class GeminiAdvisor:
    """Client for the Gemini generateContent API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 2,
    ):
        """
        Initialize the advisor.

        Args:
            api_key: API key sent with every request
            model: Model name used in the endpoint path
            base_url: API root
            timeout: Request timeout in seconds
            max_retries: Number of retries for failed requests
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Setup session with retries
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def suggest(self, state: GameState) -> Optional[int]:
        """Ask the model for a move; None unless it is legal."""
        if state.is_terminal():
            return None

        body = {
            "contents": [{"parts": [{"text": build_prompt(state)}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        try:
            response = self.session.post(
                self.endpoint,
                params={"key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            move = parse_move(response.json())
        except requests.RequestException as e:
            logger.warning(f"Advisor request failed: {e}")
            return None
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning(f"Advisor returned an unreadable answer: {e!r}")
            return None

        if move is None or not is_legal(state, move, state.current_player):
            logger.warning(f"Advisor suggested an illegal move: {move!r}")
            return None

        return move

    def close(self) -> None:
        self.session.close()
