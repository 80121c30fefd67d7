"""
Base evaluator protocol.

Any static evaluation can be plugged into the alpha-beta engine as long as
it implements this protocol.
"""

from typing import Protocol, runtime_checkable

from tidefish.position import Position


@runtime_checkable
class Evaluator(Protocol):
    """
    Protocol for position evaluation functions.

    The engine calls `evaluate()` wherever quiescence search runs out of
    captures and checks. The returned score is an integer in centipawns
    from the perspective of the side to move:
    - Positive = good for the side to move
    - Negative = bad for the side to move
    - 0 = roughly equal, or a draw

    A checkmated side to move scores -mate_score.
    """

    def evaluate(self, position: Position) -> int:
        """
        Evaluate the given position.

        Args:
            position: The position to evaluate. Must be left unchanged.

        Returns:
            Score from the side-to-move's perspective.
        """
