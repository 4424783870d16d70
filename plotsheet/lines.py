"""
Line of position geometry.

Turns a FixLine into the plane coordinates used to draw it: the intercept
segment from the assumed position, and the line of position itself running
one sheet width either side of the intercept point.
"""

import math
from typing import List, Optional, Tuple

from shapely.geometry import LineString, box

from .projection import from_plane, to_plane
from .schemas import FixGeometry, FixLine, PlanePoint, SheetFrame

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


def build_fix_geometry(fix: FixLine, frame: SheetFrame) -> FixGeometry:
    """
    Compute the drawable geometry of one line of position.

    Args:
        fix: Line of position
        frame: Current sheet frame

    Returns:
        FixGeometry with anchor, near point and both far ends
    """
    anchor = to_plane(fix.assumed_position, frame)

    # intercept in minutes of arc, i.e. degrees of latitude * 60
    distance_px = fix.distance / 60 * frame.lat_scale
    near = PlanePoint(
        x=anchor.x + math.sin(fix.azimuth) * distance_px,
        y=anchor.y - math.cos(fix.azimuth) * distance_px,
    )

    width = frame.size.width
    along = fix.azimuth - math.pi / 2
    dx = math.sin(along) * width
    dy = -math.cos(along) * width

    return FixGeometry(
        anchor=anchor,
        near=near,
        far_start=PlanePoint(x=near.x + dx, y=near.y + dy),
        far_end=PlanePoint(x=near.x - dx, y=near.y - dy),
    )


def clip_to_sheet(start: PlanePoint, end: PlanePoint, frame: SheetFrame) -> Optional[Segment]:
    """
    Clip a plane segment to the sheet rectangle.

    Returns:
        The visible part as ((x0, y0), (x1, y1)), or None when nothing is visible
    """
    if start == end:
        return None
    sheet = box(0, 0, frame.size.width, frame.size.height)
    clipped = sheet.intersection(LineString([start.as_tuple(), end.as_tuple()]))
    if clipped.is_empty or not isinstance(clipped, LineString):
        return None
    coords = list(clipped.coords)
    return (coords[0], coords[-1])


def visible_segments(geometry: FixGeometry, frame: SheetFrame) -> Tuple[Optional[Segment], Optional[Segment]]:
    """Visible parts of the intercept segment and of the line of position."""
    return (
        clip_to_sheet(geometry.anchor, geometry.near, frame),
        clip_to_sheet(geometry.far_start, geometry.far_end, frame),
    )


def fix_line_coordinates(fix: FixLine, frame: SheetFrame) -> List[Tuple[float, float]]:
    """
    Geographic (longitude, latitude) pairs of the visible line of position.

    Returns:
        Two coordinate pairs, or an empty list if the line misses the sheet
    """
    geometry = build_fix_geometry(fix, frame)
    segment = clip_to_sheet(geometry.far_start, geometry.far_end, frame)
    if segment is None:
        return []
    points = [from_plane(x, y, frame) for x, y in segment]
    return [(p.longitude, p.latitude) for p in points]
