import logging

from chess import Board, Move

from tidefish.config import Config
from tidefish.engines.alpha_beta import AlphaBeta
from tidefish.position import BoardPosition, Position

logger = logging.getLogger(__name__)


def get_engine(config: Config | None = None) -> AlphaBeta:
    """
    Returns an engine built from `config`, or from the TIDEFISH_*
    environment when no config is given.
    """
    config = config if config is not None else Config.from_env()
    return AlphaBeta(config.validate())


def choose_move(
    board: Board | Position,
    time_this_turn_ms: float | None,
    time_remaining_ms: float,
    config: Config | None = None,
    engine: AlphaBeta | None = None,
) -> Move:
    """
    Chooses a move for the side to move.

    Arguments:
        - board: a chess.Board, or any Position implementation.
        - time_this_turn_ms: hard ceiling for this move, None for none.
        - time_remaining_ms: time left on the engine's clock.
        - config: settings for a fresh engine, ignored when `engine` is given.
        - engine: engine to reuse, keeping its cache between moves of a game.

    Returns:
        - best_move: a legal move. The board is left as it was.

    Raises:
        - NoLegalMovesError: the game is already over.
    """
    position = BoardPosition(board) if isinstance(board, Board) else board
    if engine is None:
        engine = get_engine(config)

    move = engine.search_move(position, time_this_turn_ms, time_remaining_ms)
    logger.debug(
        "chose %s at depth %d (score %d, %d nodes)",
        move,
        engine.info.depth,
        engine.info.score,
        engine.info.nodes,
    )
    return move
