"""
Classical evaluator: material, PeSTO piece-square tables blended by
endgame progression, a tempo bonus and per-piece mobility.
"""

import chess

from tidefish.config import Config
from tidefish.position import Position
from tidefish.psqt import EvaluationTables, blend, endgame_progression


class ClassicalEvaluator:
    """
    Hand-written evaluation over injected, read-only tables.

    Arguments:
        - tables: piece values, piece-square tables and mobility weights.
        - config: supplies mate score, tempo bonus, blend mode and whether
            mobility is counted.
    """

    def __init__(
        self, tables: EvaluationTables | None = None, config: Config | None = None
    ):
        self.tables = tables or EvaluationTables.default()
        self.config = config or Config()

    def evaluate(self, position: Position) -> int:
        """
        Score `position` for the side to move. Checkmate scores
        -mate_score, any draw scores 0.
        """
        if position.is_checkmate():
            return -self.config.mate_score
        if position.is_draw():
            return 0

        score = self.white_score(position)
        return score if position.white_to_move else -score

    def white_score(self, position: Position) -> int:
        """
        Static score from white's point of view, ignoring mate and draws.

        Clamped to the checkmate threshold so a static score is never read
        as a forced mate.
        """
        tables = self.tables
        config = self.config
        progression = endgame_progression(position.piece_count())

        score = config.tempo_bonus if position.white_to_move else -config.tempo_bonus

        for color, piece_type, square in position.pieces():
            mg, eg = tables.psqt(piece_type, square, color)
            value = tables.piece_value(piece_type) + blend(
                mg, eg, progression, config.blend
            )
            if config.use_mobility:
                value += position.attack_count(square) * tables.mobility_weight(
                    piece_type
                )
            score += value if color == chess.WHITE else -value

        limit = config.checkmate_threshold
        return max(-limit, min(limit, score))
