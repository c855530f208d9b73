"""AI components: static evaluation, minimax search, move advisor and bot."""

from .evaluator import EvalWeights, evaluate
from .search import MinimaxSearch, SearchConfig, SearchResult, choose_move, random_move
from .advisor import GeminiAdvisor, MoveAdvisor
from .bot import Bot, BotConfig, BotMove
