"""
Rules-engine boundary.

The search never inspects a board directly: it asks a `Position` for
legal moves, plays and takes back moves in place, and reads the few facts
the evaluator needs. `BoardPosition` implements the protocol on top of
python-chess.
"""

from contextlib import contextmanager
from typing import Iterator, NamedTuple, Protocol, Sequence, runtime_checkable

import chess
import chess.polyglot


class NoLegalMovesError(ValueError):
    """The engine was asked to move in a position that is already over."""


class IllegalUndoError(RuntimeError):
    """A move was taken back that is not the last move played."""


class PieceInfo(NamedTuple):
    color: chess.Color
    piece_type: chess.PieceType
    square: chess.Square


class MoveInfo(NamedTuple):
    """Piece types involved in a move, None where a role is empty."""

    moved: chess.PieceType | None
    captured: chess.PieceType | None
    promotion: chess.PieceType | None


@runtime_checkable
class Position(Protocol):
    """
    Protocol for the mutable game state the search borrows.

    Moves are applied and taken back in place; every `make_move` must be
    matched by an `undo_move` of the same move, innermost first.
    """

    @property
    def white_to_move(self) -> bool: ...

    def legal_moves(self, captures_only: bool = False) -> Sequence[chess.Move]: ...

    def make_move(self, move: chess.Move) -> None: ...

    def undo_move(self, move: chess.Move) -> None: ...

    def is_in_check(self) -> bool: ...

    def is_checkmate(self) -> bool: ...

    def is_draw(self) -> bool: ...

    def identity(self) -> int: ...

    def pieces(self) -> Iterator[PieceInfo]: ...

    def piece_count(self) -> int: ...

    def attack_count(self, square: chess.Square) -> int: ...

    def move_info(self, move: chess.Move) -> MoveInfo: ...

    def gives_check(self, move: chess.Move) -> bool: ...


class BoardPosition:
    """
    `Position` backed by a `chess.Board`. The board is shared, not copied:
    the caller sees it exactly as it was once every search call returns.
    """

    def __init__(self, board: chess.Board | None = None):
        self.board = board if board is not None else chess.Board()

    @classmethod
    def from_fen(cls, fen: str) -> "BoardPosition":
        return cls(chess.Board(fen))

    def __repr__(self) -> str:
        return f"BoardPosition({self.board.fen()!r})"

    @property
    def white_to_move(self) -> bool:
        return self.board.turn == chess.WHITE

    def legal_moves(self, captures_only: bool = False) -> list[chess.Move]:
        if captures_only:
            return list(self.board.generate_legal_captures())
        return list(self.board.legal_moves)

    def make_move(self, move: chess.Move) -> None:
        self.board.push(move)

    def undo_move(self, move: chess.Move) -> None:
        if not self.board.move_stack or self.board.peek() != move:
            last = self.board.peek() if self.board.move_stack else None
            raise IllegalUndoError(f"cannot undo {move}, last move played is {last}")
        self.board.pop()

    def is_in_check(self) -> bool:
        return self.board.is_check()

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_draw(self) -> bool:
        """
        Stalemate, insufficient material, the fifty-move rule, or a
        position that already occurred earlier in the game.
        """
        board = self.board
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.is_fifty_moves()
            or board.is_repetition(2)
        )

    def identity(self) -> int:
        return chess.polyglot.zobrist_hash(self.board)

    def pieces(self) -> Iterator[PieceInfo]:
        for square, piece in self.board.piece_map().items():
            yield PieceInfo(piece.color, piece.piece_type, square)

    def piece_count(self) -> int:
        return chess.popcount(self.board.occupied)

    def attack_count(self, square: chess.Square) -> int:
        return chess.popcount(self.board.attacks_mask(square))

    def move_info(self, move: chess.Move) -> MoveInfo:
        board = self.board
        captured = None
        if board.is_capture(move):
            if board.is_en_passant(move):
                captured = chess.PAWN
            else:
                captured = board.piece_type_at(move.to_square)
        return MoveInfo(board.piece_type_at(move.from_square), captured, move.promotion)

    def gives_check(self, move: chess.Move) -> bool:
        return self.board.gives_check(move)


@contextmanager
def played(position: Position, move: chess.Move) -> Iterator[Position]:
    """
    Play `move` for the duration of the block and take it back on every
    way out of it, cutoffs and exceptions included.
    """
    position.make_move(move)
    try:
        yield position
    finally:
        position.undo_move(move)
