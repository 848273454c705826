"""Game logic."""

from .engine import RoundEngine
from .judging import JudgingOrder
from .validator import SubmissionValidator, ValidationResult

__all__ = [
    "JudgingOrder",
    "RoundEngine",
    "SubmissionValidator",
    "ValidationResult",
]
