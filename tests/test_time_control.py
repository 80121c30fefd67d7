import pytest

from tidefish import Config
from tidefish.time_control import TimeBudget, TimeGovernor, Timer


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def governor():
    return TimeGovernor(Config())


def test_timer_counts_down_remaining():
    clock = FakeClock(10.0)
    timer = Timer(1000, clock=clock)
    clock.now = 10.25

    budget = timer.budget()

    assert budget.elapsed_ms == pytest.approx(250)
    assert budget.remaining_ms == pytest.approx(750)
    assert budget.turn_limit_ms is None


def test_timer_never_reports_negative_remaining():
    clock = FakeClock()
    timer = Timer(100, turn_limit_ms=50, clock=clock)
    clock.now = 1.0

    assert timer.budget() == TimeBudget(1000.0, 0.0, 50)


def test_allowed_fraction_grows_toward_endgame(governor):
    assert governor.allowed_fraction(0.15) == pytest.approx(0.25 * 0.4)
    assert governor.allowed_fraction(0.5) == pytest.approx(0.25 * 0.75)
    assert governor.allowed_fraction(1.0) == pytest.approx(0.25)


def test_main_search_stops_on_its_share(governor):
    assert not governor.should_stop_search(TimeBudget(50, 1000), 0.15)
    assert governor.should_stop_search(TimeBudget(150, 1000), 0.15)
    assert not governor.should_stop_search(TimeBudget(150, 1000), 1.0)


def test_quiescence_uses_plain_fraction(governor):
    assert not governor.should_stop_quiescence(TimeBudget(150, 1000))
    assert governor.should_stop_quiescence(TimeBudget(300, 1000))


@pytest.mark.parametrize("remaining", [0, -5])
def test_no_remaining_time_always_stops(governor, remaining):
    assert governor.should_stop_search(TimeBudget(0, remaining), 1.0)
    assert governor.should_stop_quiescence(TimeBudget(0, remaining))


def test_turn_limit(governor):
    assert not governor.should_stop_search(TimeBudget(5, 100_000, 10), 0.15)
    assert governor.should_stop_search(TimeBudget(10, 100_000, 10), 0.15)
    assert governor.should_stop_quiescence(TimeBudget(0, 100_000, 0))


def test_custom_fraction():
    governor = TimeGovernor(Config(time_fraction=0.5, progression_offset=0.5))
    assert governor.allowed_fraction(0.15) == pytest.approx(0.5 * 0.65)
