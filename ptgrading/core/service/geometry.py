"""Pure geometry helpers shared by the graders.

None of these functions raise on bad input: missing, non-finite or
degenerate points give a neutral value so one corrupt frame cannot
break a grading run.
"""
import math
from typing import Optional, Sequence, Union

import numpy as np

from ptgrading.core.entities import Landmark

Point = Union[Landmark, Sequence[float], None]

EARTH_RADIUS_METERS = 6_371_000.0
NEUTRAL_ANGLE = 180.0


def _to_xy(point: Point) -> Optional[np.ndarray]:
    if point is None:
        return None
    if isinstance(point, Landmark):
        xy = (point.x, point.y)
    else:
        try:
            xy = (float(point[0]), float(point[1]))
        except (TypeError, IndexError, ValueError):
            return None
    arr = np.asarray(xy, dtype=float)
    if not np.all(np.isfinite(arr)):
        return None
    return arr


def angle_degrees(a: Point, b: Point, c: Point) -> float:
    """Angle at vertex ``b`` formed by the rays towards ``a`` and ``c``.

    Uses atan2(|cross|, dot), which stays accurate near 0 and 180 degrees.

    Returns:
        Degrees in [0, 180]; 180 when any point is unusable or a ray has
        zero length.
    """
    pa, pb, pc = _to_xy(a), _to_xy(b), _to_xy(c)
    if pa is None or pb is None or pc is None:
        return NEUTRAL_ANGLE

    ba = pa - pb
    bc = pc - pb
    if not np.any(ba) or not np.any(bc):
        return NEUTRAL_ANGLE

    with np.errstate(all="ignore"):
        cross = ba[0] * bc[1] - ba[1] * bc[0]
        dot = np.dot(ba, bc)
        angle = float(np.degrees(np.arctan2(abs(cross), dot)))

    if not math.isfinite(angle):
        return NEUTRAL_ANGLE
    return min(180.0, max(0.0, angle))


def segment_angle_from_vertical(top: Point, bottom: Point) -> Optional[float]:
    """Deviation of the line through two points from the vertical axis.

    The line is undirected, so the result is in [0, 90]. Returns None
    when either point is unusable or the points coincide.
    """
    pt, pb = _to_xy(top), _to_xy(bottom)
    if pt is None or pb is None:
        return None

    dx, dy = np.abs(pt - pb)
    if dx == 0 and dy == 0:
        return None

    with np.errstate(all="ignore"):
        angle = float(np.degrees(np.arctan2(dx, dy)))
    return angle if math.isfinite(angle) else None


def line_angle_from_vertical(top: Point, bottom: Point) -> float:
    """Same as segment_angle_from_vertical, but 0 for unusable points."""
    angle = segment_angle_from_vertical(top, bottom)
    return 0.0 if angle is None else angle


def planar_distance(a: Point, b: Point) -> float:
    """Euclidean distance in normalized frame coordinates (0 if unusable)."""
    pa, pb = _to_xy(a), _to_xy(b)
    if pa is None or pb is None:
        return 0.0
    with np.errstate(all="ignore"):
        distance = float(np.linalg.norm(pa - pb))
    return distance if math.isfinite(distance) else 0.0


def haversine_distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two coordinates."""
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return 0.0

    # Fixed argument order keeps d(p, q) and d(q, p) bit-identical.
    if (lat1, lon1) > (lat2, lon2):
        lat1, lon1, lat2, lon2 = lat2, lon2, lat1, lon1

    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = np.radians(lon2 - lon1)

    h = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    h = min(1.0, max(0.0, float(h)))
    return float(2 * EARTH_RADIUS_METERS * np.arcsin(np.sqrt(h)))
