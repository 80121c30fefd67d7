import time
from dataclasses import dataclass

from tidefish.config import Config


@dataclass(frozen=True)
class TimeBudget:
    """
    Clock readings for the move being searched, in milliseconds.

    Attributes:
        - elapsed_ms: time spent on this move so far.
        - remaining_ms: time left on the engine's clock right now.
        - turn_limit_ms: hard ceiling for this move, None for no ceiling.
    """

    elapsed_ms: float
    remaining_ms: float
    turn_limit_ms: float | None = None


class Timer:
    """
    Per-move clock. Started with the clock reading handed in by the caller;
    the remaining time shrinks as the move is being thought about.
    """

    def __init__(
        self,
        remaining_ms: float,
        turn_limit_ms: float | None = None,
        clock=time.perf_counter,
    ):
        self.remaining_at_start_ms = remaining_ms
        self.turn_limit_ms = turn_limit_ms
        self._clock = clock
        self._start = clock()

    def elapsed_ms(self) -> float:
        return (self._clock() - self._start) * 1000.0

    def budget(self) -> TimeBudget:
        elapsed = self.elapsed_ms()
        return TimeBudget(
            elapsed_ms=elapsed,
            remaining_ms=max(0.0, self.remaining_at_start_ms - elapsed),
            turn_limit_ms=self.turn_limit_ms,
        )


class TimeGovernor:
    """
    Decides when a search has used its share of the clock.

    Early in the game only a small slice of the remaining time goes to one
    move; the slice grows as pieces come off the board.
    """

    def __init__(self, config: Config):
        self.config = config

    def _out_of_time(self, budget: TimeBudget, fraction: float) -> bool:
        if budget.turn_limit_ms is not None and budget.elapsed_ms >= budget.turn_limit_ms:
            return True
        if budget.remaining_ms <= 0:
            return True
        return budget.elapsed_ms / budget.remaining_ms > fraction

    def allowed_fraction(self, progression: float) -> float:
        """Share of the remaining time the main search may spend."""
        config = self.config
        return config.time_fraction * min(config.progression_offset + progression, 1.0)

    def should_stop_search(self, budget: TimeBudget, progression: float) -> bool:
        return self._out_of_time(budget, self.allowed_fraction(progression))

    def should_stop_quiescence(self, budget: TimeBudget) -> bool:
        return self._out_of_time(budget, self.config.time_fraction)
