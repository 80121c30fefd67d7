import chess
import pytest

from tidefish import AlphaBeta, BoardPosition, Config, NoLegalMovesError
from tidefish.lib import choose_move, get_engine


def test_choose_move_accepts_board():
    board = chess.Board()
    board.push_uci("e2e4")
    fen = board.fen()

    move = choose_move(board, None, 60_000, config=Config(max_depth=2, seed=0))

    assert move in board.legal_moves
    assert board.fen() == fen
    assert len(board.move_stack) == 1


def test_choose_move_accepts_position(mate_in_one_position):
    move = choose_move(mate_in_one_position, 1_000, 60_000, config=Config(max_depth=3))
    assert move == chess.Move.from_uci("a1a8")


def test_engine_is_reused_across_moves():
    board = chess.Board()
    engine = get_engine(Config(max_depth=1, seed=0))

    for _ in range(4):
        move = choose_move(board, None, 60_000, engine=engine)
        assert move in board.legal_moves
        board.push(move)

    assert len(engine.cache) > 0


def test_choose_move_on_finished_game():
    board = chess.Board("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    with pytest.raises(NoLegalMovesError):
        choose_move(board, None, 60_000, config=Config(max_depth=1))


def test_get_engine_reads_environment(monkeypatch):
    monkeypatch.setenv("TIDEFISH_MAX_DEPTH", "3")
    monkeypatch.setenv("TIDEFISH_BLEND", "convex")

    engine = get_engine()

    assert isinstance(engine, AlphaBeta)
    assert engine.config.max_depth == 3
    assert engine.config.blend == "convex"


def test_get_engine_rejects_bad_environment(monkeypatch):
    monkeypatch.setenv("TIDEFISH_TIME_FRACTION", "lots")
    with pytest.raises(ValueError):
        get_engine()


def test_get_engine_validates_explicit_config():
    with pytest.raises(ValueError):
        get_engine(Config(max_depth=0))


def test_zero_clock_still_moves():
    position = BoardPosition()
    move = choose_move(position, 0, 0, config=Config(seed=1))
    assert move in position.board.legal_moves
