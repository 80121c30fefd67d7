import chess
import pytest

from tidefish import BoardPosition
from tidefish.move_ordering import (
    move_priority,
    organize_moves,
    organize_moves_quiescence,
)
from tidefish.psqt import EvaluationTables


@pytest.fixture(scope="module")
def tables():
    return EvaluationTables.default()


def uci(move: str) -> chess.Move:
    return chess.Move.from_uci(move)


def test_capture_priority(tables):
    position = BoardPosition.from_fen("4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1")

    assert move_priority(position, uci("e4d5"), tables) == 10 * 880 - 100
    assert move_priority(position, uci("e1e2"), tables) == 0
    assert move_priority(position, uci("e4e5"), tables) == 0


def test_promotion_priority(tables):
    position = BoardPosition.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")

    assert move_priority(position, uci("a7a8q"), tables) == 880 - 100
    assert move_priority(position, uci("a7a8n"), tables) == 310 - 100


def test_en_passant_counts_as_pawn_capture(tables):
    position = BoardPosition.from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
    assert move_priority(position, uci("e5d6"), tables) == 10 * 100 - 100


def test_queen_promotion_first(tables):
    position = BoardPosition.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    ordered = organize_moves(position, position.legal_moves(), tables)

    assert ordered[:4] == [uci("a7a8q"), uci("a7a8r"), uci("a7a8b"), uci("a7a8n")]
    assert all(move_priority(position, move, tables) == 0 for move in ordered[4:])


def test_most_valuable_victim_first(tables):
    # the pawn and the knight can both take the queen, the pawn can take the rook
    position = BoardPosition.from_fen("4k3/8/8/3q1r2/4P3/2N5/8/4K3 w - - 0 1")
    ordered = organize_moves(position, position.legal_moves(), tables)

    assert ordered[0] == uci("e4d5")
    assert ordered[1] == uci("c3d5")
    assert ordered[2] == uci("e4f5")


def test_king_captures_rank_last(tables):
    position = BoardPosition.from_fen("4k3/8/8/8/8/8/3p4/4K3 w - - 0 1")
    ordered = organize_moves(position, position.legal_moves(), tables)

    assert ordered[-1] == uci("e1d2")


def test_ties_keep_generation_order(tables):
    position = BoardPosition()
    moves = position.legal_moves()
    ordered = organize_moves(position, moves, tables)

    assert ordered == moves
    assert organize_moves(position, moves, tables) == ordered


def test_ordering_is_deterministic(tables):
    position = BoardPosition.from_fen(
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 10"
    )
    moves = position.legal_moves()
    first = organize_moves(position, moves, tables)

    assert organize_moves(position, list(moves), tables) == first
    assert sorted(first, key=str) == sorted(moves, key=str)
    priorities = [move_priority(position, move, tables) for move in first]
    assert priorities == sorted(priorities, reverse=True)


def test_quiescence_moves_are_captures_and_checks(tables):
    position = BoardPosition.from_fen("4k3/8/8/3q4/8/2N5/8/R3K3 w - - 0 1")
    moves = organize_moves_quiescence(position, tables)

    assert moves[0] == uci("c3d5")
    assert uci("a1a8") in moves
    assert uci("e1e2") not in moves
    assert len(moves) == len(set(moves))
    for move in moves:
        assert position.board.is_capture(move) or position.gives_check(move)


def test_quiescence_moves_in_quiet_position(tables):
    assert organize_moves_quiescence(BoardPosition(), tables) == []
