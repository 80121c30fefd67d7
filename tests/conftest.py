import chess
import pytest

from tidefish import BoardPosition, Config

START_FEN = chess.STARTING_FEN
# Ra8 is the only mate
BACK_RANK_MATE_FEN = "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1"
FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
# white knight can take an undefended queen
HANGING_QUEEN_FEN = "4k3/8/8/3q4/8/2N5/4P3/4K3 w - - 0 1"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "-S",
        "--search",
        action="store_true",
        default=False,
        dest="run_search_slow",
        help="Run tests marked with @pytest.mark.search_slow (long-running search checks)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("run_search_slow"):
        return
    skip_slow = pytest.mark.skip(reason="use -S/--search to enable search smoke tests")
    for item in items:
        if "search_slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def start_position() -> BoardPosition:
    return BoardPosition(chess.Board())


@pytest.fixture
def mate_in_one_position() -> BoardPosition:
    return BoardPosition.from_fen(BACK_RANK_MATE_FEN)


@pytest.fixture
def hanging_queen_position() -> BoardPosition:
    return BoardPosition.from_fen(HANGING_QUEEN_FEN)


@pytest.fixture
def fast_config() -> Config:
    return Config(max_depth=2, seed=0)
