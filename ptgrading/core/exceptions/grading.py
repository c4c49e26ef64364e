class GradingError(Exception):
    """Base exception for grading operations"""
    pass


class UnsupportedExerciseError(GradingError):
    """No grader exists for the requested exercise"""
    pass


class SessionStateError(GradingError):
    """Session operation called in the wrong lifecycle state"""
    pass
