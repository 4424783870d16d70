"""
Intersections between lines of position.

Each line of position is fitted as ``latitude = m * longitude + b`` through
two auxiliary points projected 60 degrees either side of the azimuth at
twice the intercept, which both lie on the line. Every pair of lines is
then solved in geographic space and kept when it lands on the sheet.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .projection import project_along_bearing, to_plane
from .schemas import FixLine, GeoPoint, Intersection, SheetFrame

logger = logging.getLogger(__name__)

AUXILIARY_ANGLE = 2 * math.pi / 6
SNAP_RADIUS = 10.0


def line_coefficients(fixes: Sequence[FixLine]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Fit slope and intercept of each line of position in degree space.

    Degenerate lines (zero intercept, due north-south) yield NaN or
    infinite coefficients rather than raising.

    Args:
        fixes: Lines of position

    Returns:
        Tuple of (slopes, intercepts) as float arrays
    """
    first = []
    second = []
    for fix in fixes:
        a = project_along_bearing(fix.assumed_position, fix.azimuth + AUXILIARY_ANGLE, 2 * fix.distance)
        b = project_along_bearing(fix.assumed_position, fix.azimuth - AUXILIARY_ANGLE, 2 * fix.distance)
        first.append((a.longitude, a.latitude))
        second.append((b.longitude, b.latitude))

    first = np.array(first, dtype=float).reshape(-1, 2)
    second = np.array(second, dtype=float).reshape(-1, 2)

    with np.errstate(divide="ignore", invalid="ignore"):
        slopes = (second[:, 1] - first[:, 1]) / (second[:, 0] - first[:, 0])
        intercepts = first[:, 1] - slopes * first[:, 0]
    return slopes, intercepts


def find_intersections(fixes: Sequence[FixLine], frame: SheetFrame) -> List[Intersection]:
    """
    Solve every pair of lines of position and keep those on the sheet.

    Parallel, coincident and degenerate pairs are skipped silently.

    Args:
        fixes: Lines of position in the order they were added
        frame: Current sheet frame

    Returns:
        List of Intersection objects ordered by pair (i, j), i < j
    """
    slopes, intercepts = line_coefficients(fixes)
    found = []

    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(len(fixes)):
            for j in range(i + 1, len(fixes)):
                slope_diff = slopes[i] - slopes[j]
                if slope_diff == 0 or not np.isfinite(slope_diff):
                    logger.debug("Lines %d and %d are parallel or degenerate", i, j)
                    continue

                lon = (intercepts[j] - intercepts[i]) / slope_diff
                lat = slopes[i] * lon + intercepts[i]
                if not (np.isfinite(lon) and np.isfinite(lat)):
                    logger.debug("Lines %d and %d have no finite intersection", i, j)
                    continue

                geo = GeoPoint(latitude=float(lat), longitude=float(lon))
                point = to_plane(geo, frame)
                if not frame.contains(point):
                    logger.debug("Intersection of lines %d and %d is off the sheet", i, j)
                    continue

                found.append(Intersection(
                    sheet_x=point.x - frame.center_x,
                    sheet_y=point.y - frame.center_y,
                    geo=geo,
                    pair=(i, j),
                ))

    return found


def nearest_intersection(
    dx: float,
    dy: float,
    intersections: Sequence[Intersection],
    radius: float = SNAP_RADIUS,
) -> Optional[Intersection]:
    """
    Intersection to snap the pointer to, if any.

    Args:
        dx: Pointer offset right of the sheet center in pixels
        dy: Pointer offset below the sheet center in pixels
        intersections: Intersections from the last redraw
        radius: Snap radius in pixels

    Returns:
        The last intersection within ``radius``, or None
    """
    snapped = None
    for intersection in intersections:
        if (dx - intersection.sheet_x) ** 2 + (dy - intersection.sheet_y) ** 2 <= radius ** 2:
            snapped = intersection
    return snapped
