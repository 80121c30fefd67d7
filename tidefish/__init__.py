from tidefish.config import Config
from tidefish.engines.alpha_beta import AlphaBeta, SearchInfo
from tidefish.lib import choose_move, get_engine
from tidefish.position import (
    BoardPosition,
    IllegalUndoError,
    NoLegalMovesError,
    Position,
    played,
)

__all__ = [
    "AlphaBeta",
    "BoardPosition",
    "Config",
    "IllegalUndoError",
    "NoLegalMovesError",
    "Position",
    "SearchInfo",
    "choose_move",
    "get_engine",
    "played",
]

__version__ = "0.1.0"
