from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

_SETTINGS_CONFIG = ConfigDict(
    extra="allow",
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=True,
    env_prefix="",
    env_nested_delimiter="__"
)


def _non_negative(v, label: str):
    if v < 0:
        raise ValueError(f"{label} must not be negative")
    return v


class MonitoringConfig(BaseSettings):
    """Monitoring configuration with defaults"""
    model_config = _SETTINGS_CONFIG
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_DIR: str = Field(
        default="logs",
        description="Directory for log files"
    )
    METRICS_DIR: str = Field(
        default="metrics",
        description="Directory for exported metrics files"
    )
    ENABLE_METRICS: bool = Field(
        default=True,
        description="Record session metrics"
    )

    @field_validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level


class PoseConfig(BaseSettings):
    """Settings shared by every pose-driven grader"""
    model_config = _SETTINGS_CONFIG
    VISIBILITY_THRESHOLD: float = Field(
        default=0.6,
        description="Minimum landmark visibility trusted for phase decisions"
    )
    FAULT_DISPLAY_SECONDS: float = Field(
        default=2.0,
        description="Seconds a fault message stays active after being raised"
    )

    @field_validator("VISIBILITY_THRESHOLD")
    def validate_visibility_threshold(cls, v):
        if v < 0 or v > 1:
            raise ValueError("Visibility threshold must be between 0 and 1")
        return v

    @field_validator("FAULT_DISPLAY_SECONDS")
    def validate_fault_display(cls, v):
        if v <= 0:
            raise ValueError("Fault display window must be positive")
        return v


class PushupConfig(BaseSettings):
    """Push-up thresholds (normalized shoulder height, degrees, points)"""
    model_config = _SETTINGS_CONFIG
    DOWN_SHOULDER_Y: float = Field(
        default=0.5,
        description="Shoulder Y above which the body is in the down position"
    )
    UP_SHOULDER_Y: float = Field(
        default=0.4,
        description="Shoulder Y below which the body is in the up position"
    )
    ALIGNMENT_TOLERANCE: float = Field(
        default=15.0,
        description="Allowed deviation of the hip-shoulder line from vertical, in degrees"
    )
    ALIGNMENT_PENALTY: int = Field(
        default=5,
        description="Points deducted for sagging or piking hips"
    )

    @field_validator("UP_SHOULDER_Y")
    def validate_hysteresis(cls, v, info):
        down = info.data.get("DOWN_SHOULDER_Y")
        if down is not None and v >= down:
            raise ValueError("UP_SHOULDER_Y must be lower than DOWN_SHOULDER_Y")
        return v

    @field_validator("ALIGNMENT_PENALTY")
    def validate_penalty(cls, v):
        return _non_negative(v, "ALIGNMENT_PENALTY")


class PullupConfig(BaseSettings):
    """Pull-up thresholds"""
    model_config = _SETTINGS_CONFIG
    ARMS_EXTENDED_ANGLE: float = Field(
        default=160.0,
        description="Average elbow angle at which the arms count as locked out"
    )
    CHIN_MARGIN: float = Field(
        default=0.05,
        description="How far the nose must be above the wrists to clear the bar"
    )
    KIPPING_TOLERANCE: float = Field(
        default=0.15,
        description="Allowed rise of the hips relative to the shoulders"
    )
    KIPPING_PENALTY: int = Field(
        default=10,
        description="Points deducted when kipping is detected"
    )
    COUNT_FAULTED_REPS: bool = Field(
        default=True,
        description="Count a repetition even when kipping was flagged on the way up"
    )

    @field_validator("ARMS_EXTENDED_ANGLE")
    def validate_angle(cls, v):
        if v <= 0 or v > 180:
            raise ValueError("ARMS_EXTENDED_ANGLE must be within (0, 180]")
        return v

    @field_validator("KIPPING_PENALTY")
    def validate_penalty(cls, v):
        return _non_negative(v, "KIPPING_PENALTY")


class SitupConfig(BaseSettings):
    """Sit-up thresholds (torso angle measured from vertical, in degrees)"""
    model_config = _SETTINGS_CONFIG
    DOWN_TORSO_ANGLE: float = Field(
        default=65.0,
        description="Torso angle at or above which the athlete is lying down"
    )
    UP_TORSO_ANGLE: float = Field(
        default=30.0,
        description="Torso angle at or below which the athlete is sitting up"
    )
    PARTIAL_REP_MARGIN: float = Field(
        default=15.0,
        description="Rise out of the down position that counts as an attempted rep"
    )
    ROM_PENALTY: int = Field(
        default=5,
        description="Points deducted for an incomplete sit-up"
    )
    KNEE_MAX_ANGLE: float = Field(
        default=120.0,
        description="Largest hip-knee-ankle angle accepted as bent knees"
    )
    KNEE_PENALTY: int = Field(
        default=5,
        description="Points deducted for straight legs"
    )

    @field_validator("UP_TORSO_ANGLE")
    def validate_hysteresis(cls, v, info):
        down = info.data.get("DOWN_TORSO_ANGLE")
        if down is not None and v >= down:
            raise ValueError("UP_TORSO_ANGLE must be lower than DOWN_TORSO_ANGLE")
        return v

    @field_validator("ROM_PENALTY", "KNEE_PENALTY")
    def validate_penalty(cls, v, info):
        return _non_negative(v, info.field_name)


class RunningConfig(BaseSettings):
    """Running thresholds"""
    model_config = _SETTINGS_CONFIG
    MIN_MOVEMENT_METERS: float = Field(
        default=5.0,
        description="Moves shorter than this are treated as GPS jitter"
    )
    MAX_PLAUSIBLE_SPEED: float = Field(
        default=4.5,
        description="Speed in m/s above which a fix is considered a likely GPS spike"
    )
    SPEED_PENALTY: int = Field(
        default=2,
        description="Points deducted per implausible speed sample"
    )
    SPEED_PENALTY_CAP: int = Field(
        default=20,
        description="Maximum total points deducted for speed spikes"
    )
    METERS_PER_MILE: float = Field(
        default=1609.34,
        description="Distance unit used for pace"
    )
    CALORIES_PER_METER: float = Field(
        default=0.07,
        description="Rough energy estimate used in run summaries"
    )
    TARGET_DISTANCE_METERS: float = Field(
        default=3218.69,
        description="Test distance; the run completes on its own once it is covered"
    )
    MIN_COMPLETION_RATIO: float = Field(
        default=0.9,
        description="Fraction of the target distance required for the run to score"
    )

    @field_validator("MIN_MOVEMENT_METERS", "SPEED_PENALTY", "SPEED_PENALTY_CAP", "CALORIES_PER_METER")
    def validate_non_negative(cls, v, info):
        return _non_negative(v, info.field_name)

    @field_validator("MAX_PLAUSIBLE_SPEED", "METERS_PER_MILE", "TARGET_DISTANCE_METERS")
    def validate_positive(cls, v, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive")
        return v

    @field_validator("MIN_COMPLETION_RATIO")
    def validate_ratio(cls, v):
        if not 0.0 < v <= 1.0:
            raise ValueError("MIN_COMPLETION_RATIO must be in (0, 1]")
        return v


class AppConfig(BaseSettings):
    """Application configuration with defaults and environment variable support"""
    model_config = ConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_nested_delimiter="__"
    )
    APP_NAME: str = Field(
        default="ptgrading",
        description="Application name"
    )
    ENV: str = Field(
        default="development",
        description="Environment (development, testing, production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    # Component Configurations
    MONITORING: MonitoringConfig = Field(
        default_factory=MonitoringConfig,
        description="Monitoring configuration"
    )
    POSE: PoseConfig = Field(
        default_factory=PoseConfig,
        description="Shared pose grading configuration"
    )
    PUSHUP: PushupConfig = Field(
        default_factory=PushupConfig,
        description="Push-up grading configuration"
    )
    PULLUP: PullupConfig = Field(
        default_factory=PullupConfig,
        description="Pull-up grading configuration"
    )
    SITUP: SitupConfig = Field(
        default_factory=SitupConfig,
        description="Sit-up grading configuration"
    )
    RUNNING: RunningConfig = Field(
        default_factory=RunningConfig,
        description="Running grading configuration"
    )

    @field_validator("ENV")
    def validate_env(cls, v):
        if v not in ["development", "testing", "production"]:
            raise ValueError("ENV must be one of: development, testing, production")
        return v
