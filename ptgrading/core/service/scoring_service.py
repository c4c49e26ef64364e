"""APFT point tables for the 17-21 age group and lookups over them."""
from typing import Dict, Mapping, Optional

from ptgrading.core.entities import ExerciseType
from ptgrading.core.exceptions import UnsupportedExerciseError
from ptgrading.core.interface import ScoringInterface
from ptgrading.utilities.monitoring import MonitoringFactory
from ptgrading.utilities.validators.config_validator import RunningConfig

logger = MonitoringFactory.get_logger("service.scoring")

PUSHUP_SCORE_TABLE: Dict[int, int] = dict(enumerate((
    0, 1, 3, 4, 6, 7, 9, 10, 12, 13,
    15, 16, 18, 19, 21, 22, 24, 25, 26, 28,
    29, 31, 32, 34, 35, 37, 38, 40, 41, 43,
    44, 46, 47, 48, 50, 51, 53, 54, 56, 57,
    59, 60, 62, 63, 65, 66, 68, 69, 71, 72,
    74, 75, 76, 78, 79, 81, 82, 84, 85, 87,
    88, 90, 91, 93, 94, 96, 97, 99, 100,
)))

SITUP_SCORE_TABLE: Dict[int, int] = {
    **{reps: reps for reps in range(51)},
    51: 52, 52: 58, 53: 60, 54: 62, 55: 64, 56: 66, 57: 68, 58: 70,
    59: 72, 60: 74, 61: 76, 62: 78, 63: 80, 64: 82, 65: 84, 66: 86,
    67: 88, 68: 90, 69: 91, 70: 92, 71: 93, 72: 94, 73: 95, 74: 96,
    75: 97, 76: 98, 77: 99, 78: 100,
}

PULLUP_SCORE_TABLE: Dict[int, int] = {reps: reps * 4 for reps in range(26)}

# Two-mile run: 11:00 (660 s) scores 100 down to 19:30 (1170 s) at 0, in 6 s steps.
RUNNING_SCORE_TABLE: Dict[int, int] = dict(zip(range(660, 1171, 6), (
    100, 99, 98, 96, 95, 94, 93, 92, 91, 89,
    88, 87, 86, 85, 84, 82, 81, 80, 79, 78,
    76, 75, 74, 73, 72, 71, 69, 68, 67, 66,
    64, 63, 62, 61, 60, 59, 57, 56, 55, 54,
    53, 51, 50, 49, 48, 47, 45, 44, 43, 42,
    41, 39, 38, 37, 36, 35, 33, 32, 31, 30,
    29, 28, 27, 26, 24, 23, 22, 21, 20, 19,
    18, 16, 15, 14, 13, 12, 11, 10, 9, 8,
    6, 5, 4, 3, 2, 0,
)))

REP_TABLES: Dict[ExerciseType, Mapping[int, int]] = {
    ExerciseType.PUSHUP: PUSHUP_SCORE_TABLE,
    ExerciseType.SITUP: SITUP_SCORE_TABLE,
    ExerciseType.PULLUP: PULLUP_SCORE_TABLE,
}


def lookup_rep_score(reps: int, table: Mapping[int, int]) -> int:
    """Score for the closest rep count at or below ``reps``."""
    max_reps = max(table)
    if reps >= max_reps:
        return table[max_reps]
    for candidate in range(int(reps), -1, -1):
        if candidate in table:
            return table[candidate]
    return 0


def lookup_run_score(time_in_seconds: float, table: Mapping[int, int] = RUNNING_SCORE_TABLE) -> int:
    """Score for the closest listed time at or below ``time_in_seconds``."""
    times = sorted(table)
    if time_in_seconds <= times[0]:
        return table[times[0]]
    if time_in_seconds >= times[-1]:
        return table[times[-1]]

    best = times[0]
    for listed in times:
        if listed > time_in_seconds:
            break
        best = listed
    return table[best]


class ScoringService(ScoringInterface):
    def __init__(self, running_config: Optional[RunningConfig] = None):
        self.running_config = running_config or RunningConfig()

    def score_reps(self, exercise_type: ExerciseType, reps: int) -> int:
        table = REP_TABLES.get(ExerciseType(exercise_type))
        if table is None:
            raise UnsupportedExerciseError(f"No repetition table for {exercise_type}")
        return lookup_rep_score(max(0, reps), table)

    def score_run(self, time_in_seconds: float, distance_meters: Optional[float] = None) -> int:
        """
        Score a run against the two-mile table.

        Without a distance the time is taken as a full two-mile time. With
        one, runs short of MIN_COMPLETION_RATIO of the target score 0 and
        the rest are scored on their time scaled to the target distance.
        """
        if distance_meters is None:
            return lookup_run_score(time_in_seconds)

        target = self.running_config.TARGET_DISTANCE_METERS
        if distance_meters < target * self.running_config.MIN_COMPLETION_RATIO:
            logger.info(f"Run of {distance_meters:.0f} m is short of the {target:.0f} m target")
            return 0
        return lookup_run_score(time_in_seconds * target / distance_meters)

    @staticmethod
    def format_score_display(reps: int, score: int) -> str:
        return f"{reps} reps → {score} points"

    @staticmethod
    def format_running_score_display(time_in_seconds: float, score: int) -> str:
        minutes, seconds = divmod(int(time_in_seconds), 60)
        return f"{minutes}:{seconds:02d} → {score} points"
