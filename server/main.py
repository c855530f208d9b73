"""
FastAPI server for the Plus-Slash game engine.

Provides a REST API for game management and bot play. Games live in
memory only and are independent of each other.
"""

from __future__ import annotations
import logging
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from plusslash import __version__
from plusslash.ai.bot import Bot, BotConfig
from plusslash.config import MAX_SEARCH_DEPTH, Settings
from plusslash.core.history import GameHistory, GameMode, HistoryError
from plusslash.core.notation import GameRecord, cell_to_name
from plusslash.core.rules import IllegalMoveError, legal_moves, winning_line

settings = Settings.from_env()


# --- Pydantic Models ---

class CreateGameRequest(BaseModel):
    mode: GameMode = GameMode.PVE
    bot_depth: int = Field(default=settings.search_depth, ge=1, le=MAX_SEARCH_DEPTH)
    use_advisor: bool = False


class CreateGameResponse(BaseModel):
    game_id: str


class GameStateResponse(BaseModel):
    game_id: str
    mode: GameMode
    board: list[str]
    current_player: int
    phase: str
    last_move: Optional[int]
    outcome: str
    status: str
    winner: Optional[int]
    winning_line: Optional[list[int]]
    legal_moves: list[int]
    ply: int
    can_undo: bool
    can_redo: bool


class MakeMoveRequest(BaseModel):
    index: int


class AIMoveResponse(BaseModel):
    index: int
    cell: str
    source: str
    game_state: GameStateResponse


class LegalMove(BaseModel):
    index: int
    cell: str


class LegalMovesResponse(BaseModel):
    moves: list[LegalMove]


class RecordResponse(BaseModel):
    text: str
    moves: list[int]
    result: str


class HealthResponse(BaseModel):
    status: str
    version: str
    advisor: bool


# --- Game Storage ---

class Game:
    """Represents an active game session."""

    def __init__(self, game_id: str, mode: GameMode = GameMode.PVE, bot: Optional[Bot] = None):
        self.game_id = game_id
        self.history = GameHistory(mode)
        self.bot = bot or Bot()

    def to_response(self) -> GameStateResponse:
        """Convert to API response."""
        state = self.history.current
        winner = state.winner
        line = winning_line(state.board)

        return GameStateResponse(
            game_id=self.game_id,
            mode=self.history.mode,
            board=[cell.value for cell in state.board],
            current_player=state.current_player.value,
            phase=state.phase.name.lower(),
            last_move=state.last_move,
            outcome=state.outcome.value,
            status="finished" if state.is_terminal() else "playing",
            winner=winner.value if winner is not None else None,
            winning_line=list(line) if line is not None else None,
            legal_moves=legal_moves(state),
            ply=len(self.history.moves),
            can_undo=self.history.can_undo,
            can_redo=self.history.can_redo,
        )


games: dict[str, Game] = {}


def get_game(game_id: str) -> Game:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="Game not found")
    return games[game_id]


# --- App Setup ---

app = FastAPI(
    title="Plus-Slash Engine",
    description="Game engine API for the Plus-Slash board game",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- REST Endpoints ---

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__, advisor=settings.advisor_available)


@app.post("/games", response_model=CreateGameResponse)
async def create_game(request: Optional[CreateGameRequest] = None):
    """Create a new game."""
    if request is None:
        request = CreateGameRequest()

    game_id = str(uuid.uuid4())[:8]
    advisor = settings.make_advisor() if request.use_advisor else None
    bot = Bot(
        BotConfig(depth=request.bot_depth, use_advisor=advisor is not None),
        advisor=advisor,
    )
    games[game_id] = Game(game_id, mode=request.mode, bot=bot)
    logging.info(f"Created game {game_id} ({request.mode.value}, depth {request.bot_depth})")

    return CreateGameResponse(game_id=game_id)


@app.get("/games/{game_id}", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state."""
    return get_game(game_id).to_response()


@app.post("/games/{game_id}/move", response_model=GameStateResponse)
async def make_move(game_id: str, request: MakeMoveRequest):
    """Make a move."""
    game = get_game(game_id)

    if game.history.current.is_terminal():
        raise HTTPException(status_code=409, detail="Game already finished")

    try:
        game.history.play(request.index)
    except IllegalMoveError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return game.to_response()


@app.post("/games/{game_id}/ai", response_model=AIMoveResponse)
async def get_ai_move(game_id: str):
    """Get the bot to choose and play a move."""
    game = get_game(game_id)
    state = game.history.current

    if state.is_terminal():
        raise HTTPException(status_code=409, detail="Game already finished")

    bot_move = game.bot.select_move(state)
    if bot_move is None:
        # A stalemate is marked terminal by the move that caused it
        raise HTTPException(status_code=409, detail="No legal moves")

    game.history.play(bot_move.index)

    return AIMoveResponse(
        index=bot_move.index,
        cell=cell_to_name(bot_move.index),
        source=bot_move.source,
        game_state=game.to_response(),
    )


@app.get("/games/{game_id}/legal-moves", response_model=LegalMovesResponse)
async def get_legal_moves_endpoint(game_id: str):
    """Get all legal moves with their cell names."""
    game = get_game(game_id)
    moves = legal_moves(game.history.current)
    return LegalMovesResponse(moves=[LegalMove(index=m, cell=cell_to_name(m)) for m in moves])


@app.post("/games/{game_id}/undo", response_model=GameStateResponse)
async def undo_move(game_id: str):
    """Undo the last move (or the last round against the bot)."""
    game = get_game(game_id)
    try:
        game.history.undo()
    except HistoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return game.to_response()


@app.post("/games/{game_id}/redo", response_model=GameStateResponse)
async def redo_move(game_id: str):
    """Redo a move that was undone."""
    game = get_game(game_id)
    try:
        game.history.redo()
    except HistoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return game.to_response()


@app.get("/games/{game_id}/record", response_model=RecordResponse)
async def get_record(game_id: str):
    """Export the game up to the current position."""
    game = get_game(game_id)
    second = "Bot" if game.history.mode is GameMode.PVE else "Player 2"
    record = GameRecord.from_moves(game.history.moves, player_two=second)
    return RecordResponse(text=record.to_text(), moves=record.moves, result=record.result)


# --- Entry Point ---

def run_server(host: str = "0.0.0.0", port: int = 8000):
    """Run the server."""
    import uvicorn
    from plusslash.config import setup_logging

    setup_logging(settings.log_level)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
