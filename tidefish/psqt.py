# flake8: noqa

from dataclasses import dataclass

import chess
import numpy as np

############
# PeSTO piece-square tables:
# https://www.chessprogramming.org/PeSTO%27s_Evaluation_Function
# Tables are laid out from a8 (index 0) to h1 (index 63), so black reads
# them at the square index and white at the vertically flipped index.
############
# Material values indexed by piece type (0=none, 1=PAWN, 2=KNIGHT, ..., 6=KING)
PIECE_VALUES = (0, 100, 310, 330, 510, 880, 10000)

# Per attacked square. The king is penalised for activity.
MOBILITY_WEIGHTS = (0, 0, 4, 4, 3, 2, -3)

# fmt: off
MG_PAWN = [
    0,   0,   0,   0,   0,   0,  0,   0,
    98, 134,  61,  95,  68, 126, 34, -11,
    -6,   7,  26,  31,  65,  56, 25, -20,
    -14,  13,   6,  21,  23,  12, 17, -23,
    -27,  -2,  -5,  12,  17,   6, 10, -25,
    -26,  -4,  -4, -10,   3,   3, 33, -12,
    -35,  -1, -20, -23, -15,  24, 38, -22,
      0,   0,   0,   0,   0,   0,  0,   0]

EG_PAWN = [
    0,   0,   0,   0,   0,   0,   0,   0,
    178, 173, 158, 134, 147, 132, 165, 187,
     94, 100,  85,  67,  56,  53,  82,  84,
     32,  24,  13,   5,  -2,   4,  17,  17,
     13,   9,  -3,  -7,  -7,  -8,   3,  -1,
      4,   7,  -6,   1,   0,  -5,  -1,  -8,
     13,   8,   8,  10,  13,   0,   2,  -7,
      0,   0,   0,   0,   0,   0,   0,   0]

MG_KNIGHT = [
    -167, -89, -34, -49,  61, -97, -15, -107,
     -73, -41,  72,  36,  23,  62,   7,  -17,
     -47,  60,  37,  65,  84, 129,  73,   44,
      -9,  17,  19,  53,  37,  69,  18,   22,
     -13,   4,  16,  13,  28,  19,  21,   -8,
     -23,  -9,  12,  10,  19,  17,  25,  -16,
     -29, -53, -12,  -3,  -1,  18, -14,  -19,
    -105, -21, -58, -33, -17, -28, -19,  -23]

EG_KNIGHT = [
    -58, -38, -13, -28, -31, -27, -63, -99,
    -25,  -8, -25,  -2,  -9, -25, -24, -52,
    -24, -20,  10,   9,  -1,  -9, -19, -41,
    -17,   3,  22,  22,  22,  11,   8, -18,
    -18,  -6,  16,  25,  16,  17,   4, -18,
    -23,  -3,  -1,  15,  10,  -3, -20, -22,
    -42, -20, -10,  -5,  -2, -20, -23, -44,
    -29, -51, -23, -15, -22, -18, -50, -64]

MG_BISHOP = [
    -29,   4, -82, -37, -25, -42,   7,  -8,
    -26,  16, -18, -13,  30,  59,  18, -47,
    -16,  37,  43,  40,  35,  50,  37,  -2,
     -4,   5,  19,  50,  37,  37,   7,  -2,
     -6,  13,  13,  26,  34,  12,  10,   4,
      0,  15,  15,  15,  14,  27,  18,  10,
      4,  15,  16,   0,   7,  21,  33,   1,
    -33,  -3, -14, -21, -13, -12, -39, -21]

EG_BISHOP = [
    -14, -21, -11,  -8, -7,  -9, -17, -24,
     -8,  -4,   7, -12, -3, -13,  -4, -14,
      2,  -8,   0,  -1, -2,   6,   0,   4,
     -3,   9,  12,   9, 14,  10,   3,   2,
     -6,   3,  13,  19,  7,  10,  -3,  -9,
    -12,  -3,   8,  10, 13,   3,  -7, -15,
    -14, -18,  -7,  -1,  4,  -9, -15, -27,
    -23,  -9, -23,  -5, -9, -16,  -5, -17]

MG_ROOK = [
     32,  42,  32,  51, 63,  9,  31,  43,
     27,  32,  58,  62, 80, 67,  26,  44,
     -5,  19,  26,  36, 17, 45,  61,  16,
    -24, -11,   7,  26, 24, 35,  -8, -20,
    -36, -26, -12,  -1,  9, -7,   6, -23,
    -45, -25, -16, -17,  3,  0,  -5, -33,
    -44, -16, -20,  -9, -1, 11,  -6, -71,
    -19, -13,   1,  17, 16,  7, -37, -26]

EG_ROOK = [
    13, 10, 18, 15, 12,  12,   8,   5,
    11, 13, 13, 11, -3,   3,   8,   3,
     7,  7,  7,  5,  4,  -3,  -5,  -3,
     4,  3, 13,  1,  2,   1,  -1,   2,
     3,  5,  8,  4, -5,  -6,  -8, -11,
    -4,  0, -5, -1, -7, -12,  -8, -16,
    -6, -6,  0,  2, -9,  -9, -11,  -3,
    -9,  2,  3, -1, -5, -13,   4, -20]

MG_QUEEN = [
    -28,   0,  29,  12,  59,  44,  43,  45,
    -24, -39,  -5,   1, -16,  57,  28,  54,
    -13, -17,   7,   8,  29,  56,  47,  57,
    -27, -27, -16, -16,  -1,  17,  -2,   1,
     -9, -26,  -9, -10,  -2,  -4,   3,  -3,
    -14,   2, -11,  -2,  -5,   2,  14,   5,
    -35,  -8,  11,   2,   8,  15,  -3,   1,
     -1, -18,  -9,  10, -15, -25, -31, -50]

EG_QUEEN = [
     -9,  22,  22,  27,  27,  19,  10,  20,
    -17,  20,  32,  41,  58,  25,  30,   0,
    -20,   6,   9,  49,  47,  35,  19,   9,
      3,  22,  24,  45,  57,  40,  57,  36,
    -18,  28,  19,  47,  31,  34,  39,  23,
    -16, -27,  15,   6,   9,  17,  10,   5,
    -22, -23, -30, -16, -16, -23, -36, -32,
    -33, -28, -22, -43,  -5, -32, -20, -41]

MG_KING = [
    -65,  23,  16, -15, -56, -34,   2,  13,
     29,  -1, -20,  -7,  -8,  -4, -38, -29,
     -9,  24,   2, -16, -20,   6,  22, -22,
    -17, -20, -12, -27, -30, -25, -14, -36,
    -49,  -1, -27, -39, -46, -44, -33, -51,
    -14, -14, -22, -46, -44, -30, -15, -27,
      1,   7,  -8, -64, -43, -16,   9,   8,
    -15,  36,  12, -54,   8, -28,  24,  14]

EG_KING = [
    -74, -35, -18, -18, -11,  15,   4, -17,
    -12,  17,  14,  17,  17,  38,  23,  11,
     10,  17,  23,  15,  20,  45,  44,  13,
     -8,  22,  24,  27,  26,  33,  26,   3,
    -18,  -4,  21,  24,  27,  23,   9, -11,
    -19,  -3,  11,  21,  23,  16,   7,  -9,
    -27, -11,   4,  13,  14,   4,  -5, -17,
    -53, -34, -21, -11, -28, -14, -24, -43]
# fmt: on

MG_TABLES = (MG_PAWN, MG_KNIGHT, MG_BISHOP, MG_ROOK, MG_QUEEN, MG_KING)
EG_TABLES = (EG_PAWN, EG_KNIGHT, EG_BISHOP, EG_ROOK, EG_QUEEN, EG_KING)

# Piece count of a full board; endgame progression is measured against it.
FULL_BOARD = 32
PROGRESSION_BIAS = 0.15
MIN_PROGRESSION = PROGRESSION_BIAS


def _frozen(rows) -> np.ndarray:
    array = np.array(rows, dtype=np.int32)
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class EvaluationTables:
    """
    Read-only evaluation data shared by the evaluator and the move orderer.

    `mg` and `eg` have shape (7, 64), one row per piece type with row 0
    (no piece) all zeros. Arrays are marked non-writeable so one instance
    can be handed to any number of engines.
    """

    mg: np.ndarray
    eg: np.ndarray
    values: np.ndarray
    mobility: np.ndarray

    @classmethod
    def default(cls) -> "EvaluationTables":
        empty = [0] * 64
        return cls(
            mg=_frozen([empty, *MG_TABLES]),
            eg=_frozen([empty, *EG_TABLES]),
            values=_frozen(PIECE_VALUES),
            mobility=_frozen(MOBILITY_WEIGHTS),
        )

    def piece_value(self, piece_type: int | None) -> int:
        if not piece_type:
            return 0
        return int(self.values[piece_type])

    def mobility_weight(self, piece_type: int) -> int:
        return int(self.mobility[piece_type])

    def psqt(
        self, piece_type: int, square: chess.Square, color: chess.Color
    ) -> tuple[int, int]:
        """
        Middlegame and endgame table bonus for a piece standing on a square.
        """
        index = square ^ 56 if color == chess.WHITE else square
        return int(self.mg[piece_type, index]), int(self.eg[piece_type, index])


def endgame_progression(piece_count: int) -> float:
    """
    How far the game has moved toward an endgame, from the number of
    pieces (pawns and kings included) left on the board.

    A full board gives 0.15, seven or fewer pieces give 1.0.
    """
    progression = 1.0 - piece_count / FULL_BOARD + PROGRESSION_BIAS
    return min(1.0, max(MIN_PROGRESSION, progression))


def blend(mg: int, eg: int, progression: float, mode: str = "literal") -> int:
    """
    Combine a middlegame and an endgame value.

    "literal" keeps the weighting the engine was tuned with,
    mg / progression + eg * progression, which inflates middlegame values
    on a crowded board. "convex" is the textbook tapered evaluation
    mg * (1 - progression) + eg * progression.
    """
    if mode == "literal":
        return round(mg / progression + eg * progression)
    if mode == "convex":
        return round(mg * (1.0 - progression) + eg * progression)
    raise ValueError(f"unknown blend {mode!r}")
