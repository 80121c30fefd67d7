from typing import Iterable

import chess

from tidefish.position import Position
from tidefish.psqt import EvaluationTables


def move_priority(
    position: Position, move: chess.Move, tables: EvaluationTables
) -> int:
    """
    Cheap tactical priority of a move: most valuable victim first, least
    valuable attacker first among equal victims, promotions ranked by the
    value of the new piece. Quiet moves score 0.

    Arguments:
            - position: position the move is played from
            - move: legal move in that position
            - tables: source of the piece values

    Returns:
            - priority: higher is searched earlier
    """
    moved, captured, promotion = position.move_info(move)
    if captured is None and promotion is None:
        return 0

    priority = 10 * tables.piece_value(captured) - tables.piece_value(moved)
    if promotion is not None:
        priority += tables.piece_value(promotion)
    return priority


def organize_moves(
    position: Position, moves: Iterable[chess.Move], tables: EvaluationTables
) -> list[chess.Move]:
    """
    This function receives a position and its moves and returns them
    sorted by priority, highest first. Moves with equal priority keep the
    order they were generated in, so the result is deterministic.

    Arguments:
            - position: position state
            - moves: legal moves to rank
            - tables: source of the piece values

    Returns:
            - moves: list of the moves sorted by importance.
    """
    return sorted(
        moves, key=lambda move: move_priority(position, move, tables), reverse=True
    )


def organize_moves_quiescence(
    position: Position, tables: EvaluationTables
) -> list[chess.Move]:
    """
    Tactical moves only: every capture plus every quiet move that gives
    check, ranked like `organize_moves`.
    """
    captures = position.legal_moves(captures_only=True)
    seen = set(captures)
    checks = [
        move
        for move in position.legal_moves()
        if move not in seen and position.gives_check(move)
    ]
    return organize_moves(position, captures + checks, tables)
