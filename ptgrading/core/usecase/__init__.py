from .grading_usecase import GradingSessionUseCase

__all__ = ["GradingSessionUseCase"]
