import math
from typing import List, Optional

from ptgrading.core.entities import GeoFix, RunningSnapshot, RunSummary
from ptgrading.core.interface import RunningGraderInterface
from ptgrading.core.service.geometry import haversine_distance_meters
from ptgrading.utilities.monitoring import MonitoringFactory
from ptgrading.utilities.validators.config_validator import RunningConfig

logger = MonitoringFactory.get_logger("service.running")

MAX_FORM_SCORE = 100


def format_pace(minutes_per_unit: float) -> str:
    """Format a pace in minutes as ``mm:ss``; unusable values give ``00:00``."""
    if not math.isfinite(minutes_per_unit) or minutes_per_unit <= 0:
        return "00:00"
    minutes, seconds = divmod(int(minutes_per_unit * 60), 60)
    return f"{minutes:02d}:{seconds:02d}"


class RunningGrader(RunningGraderInterface):
    """
    Accumulates distance and pace from GPS fixes.

    Moves shorter than MIN_MOVEMENT_METERS are treated as jitter and the
    previous anchor fix is kept, so slow progress still adds up once it
    clears the threshold. Implausibly fast moves are penalized but the
    distance is kept. The run stops by itself once TARGET_DISTANCE_METERS
    is covered and cannot be restarted until reset.
    """

    def __init__(self, config: Optional[RunningConfig] = None):
        self.config = config or RunningConfig()
        self.reset()

    def reset(self) -> None:
        self.is_running = False
        self.is_complete = False
        self.anchor_fix: Optional[GeoFix] = None
        self.last_timestamp_ms: Optional[int] = None
        self.distance_meters = 0.0
        self.elapsed_ms = 0
        self.form_score = MAX_FORM_SCORE
        self.speed_penalty_total = 0
        self.path: List[GeoFix] = []

    def start_run(self) -> None:
        if self.is_running:
            return
        if self.is_complete:
            logger.info("Run already completed, reset before starting again")
            return
        self.is_running = True
        # Time and distance spent paused are not counted.
        self.anchor_fix = None
        self.last_timestamp_ms = None
        logger.info("Run started")

    def update_fix(self, fix: GeoFix) -> RunningSnapshot:
        if not self.is_running:
            logger.debug("Ignoring fix received while the run is stopped")
            return self.snapshot()

        self._advance_clock(fix.timestamp_ms)

        if self.anchor_fix is None:
            self._accept(fix)
            return self.snapshot()

        distance = haversine_distance_meters(
            self.anchor_fix.latitude,
            self.anchor_fix.longitude,
            fix.latitude,
            fix.longitude,
        )
        if distance < self.config.MIN_MOVEMENT_METERS:
            return self.snapshot()

        delta_seconds = (fix.timestamp_ms - self.anchor_fix.timestamp_ms) / 1000.0
        if delta_seconds > 0:
            speed = distance / delta_seconds
            if speed > self.config.MAX_PLAUSIBLE_SPEED:
                self._penalize_speed(speed)

        self.distance_meters += distance
        self._accept(fix)
        if self.distance_meters >= self.config.TARGET_DISTANCE_METERS:
            self._complete()
        return self.snapshot()

    def _complete(self) -> None:
        self.is_running = False
        self.is_complete = True
        logger.info(
            f"Target distance {self.config.TARGET_DISTANCE_METERS:.0f} m reached "
            f"in {self.get_elapsed_seconds():.0f} s"
        )

    def stop_run(self) -> RunSummary:
        self.is_running = False
        summary = self.summary()
        logger.info(
            f"Run stopped: {summary.distance_meters:.1f} m in {summary.elapsed_seconds:.0f} s, "
            f"pace {summary.pace_formatted}, form score {summary.form_score}"
        )
        return summary

    def _advance_clock(self, timestamp_ms: int) -> None:
        if self.last_timestamp_ms is not None and timestamp_ms > self.last_timestamp_ms:
            self.elapsed_ms += timestamp_ms - self.last_timestamp_ms
        if self.last_timestamp_ms is None or timestamp_ms > self.last_timestamp_ms:
            self.last_timestamp_ms = timestamp_ms

    def _accept(self, fix: GeoFix) -> None:
        self.anchor_fix = fix
        self.path.append(fix)

    def _penalize_speed(self, speed: float) -> None:
        penalty = min(
            self.config.SPEED_PENALTY,
            self.config.SPEED_PENALTY_CAP - self.speed_penalty_total,
        )
        logger.info(f"Implausible speed {speed:.1f} m/s, likely GPS error")
        if penalty <= 0:
            return
        self.speed_penalty_total += penalty
        self.form_score = max(0, self.form_score - penalty)

    def get_distance(self) -> float:
        return self.distance_meters

    def get_elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0

    def get_pace_minutes_per_mile(self) -> float:
        miles = self.distance_meters / self.config.METERS_PER_MILE
        if miles <= 0:
            return 0.0
        pace = (self.elapsed_ms / 60000.0) / miles
        return pace if math.isfinite(pace) else 0.0

    def get_pace_formatted(self) -> str:
        return format_pace(self.get_pace_minutes_per_mile())

    def get_form_score(self) -> int:
        return self.form_score

    def get_progress(self) -> float:
        """Fraction of the target distance covered, capped at 1."""
        return min(1.0, self.distance_meters / self.config.TARGET_DISTANCE_METERS)

    def snapshot(self) -> RunningSnapshot:
        return RunningSnapshot(
            distance_meters=self.distance_meters,
            pace_formatted=self.get_pace_formatted(),
            form_score=self.form_score,
            progress=self.get_progress(),
            completed=self.is_complete,
        )

    def summary(self) -> RunSummary:
        return RunSummary(
            distance_meters=self.distance_meters,
            elapsed_seconds=self.get_elapsed_seconds(),
            pace_formatted=self.get_pace_formatted(),
            form_score=self.form_score,
            accepted_fixes=len(self.path),
            estimated_calories=self.distance_meters * self.config.CALORIES_PER_METER,
            completed=self.is_complete,
            path=list(self.path),
        )
