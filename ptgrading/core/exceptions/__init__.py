from .grading import GradingError, UnsupportedExerciseError, SessionStateError

__all__ = [
    "GradingError",
    "UnsupportedExerciseError",
    "SessionStateError",
]
