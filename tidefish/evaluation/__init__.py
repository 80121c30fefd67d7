from tidefish.evaluation.base import Evaluator
from tidefish.evaluation.classical import ClassicalEvaluator

__all__ = ["Evaluator", "ClassicalEvaluator"]
