"""
Plotting sheet projection.

Maps geographic coordinates onto the sheet and back, and projects a rhumb
line from a point. Both are local planar approximations meant for the few
degrees covered by a universal plotting sheet. All functions are pure and
stateless.
"""

import math

from .schemas import GeoPoint, PlanePoint, SheetFrame, SheetSize

# Pixels reserved above and below the latitude span
DEFAULT_MARGIN = 80.0
# Degrees of latitude that fit on the sheet vertically
DEFAULT_LAT_SPAN = 4.0
MINUTES_PER_DEGREE = 60.0


def build_frame(
    center: GeoPoint,
    size: SheetSize,
    margin: float = DEFAULT_MARGIN,
    lat_span: float = DEFAULT_LAT_SPAN,
) -> SheetFrame:
    """
    Build the frame for a sheet of the given size centered on ``center``.

    Args:
        center: Geographic position at the sheet center
        size: Sheet size in device-independent pixels
        margin: Pixels left over after fitting ``lat_span`` degrees
        lat_span: Degrees of latitude spanning the sheet height

    A sheet no taller than twice the margin keeps half its height for the
    latitude span, so the scale stays positive however small the viewport.

    Returns:
        SheetFrame with the latitude scale; the longitude scale is derived
    """
    margin = min(margin, size.height / 2)
    lat_scale = (size.height - margin) / lat_span
    return SheetFrame(center=center, lat_scale=lat_scale, size=size)


def to_plane(point: GeoPoint, frame: SheetFrame) -> PlanePoint:
    """Project a geographic position to sheet pixels (y grows downward)."""
    return PlanePoint(
        x=frame.center_x + (point.longitude - frame.center.longitude) * frame.lon_scale,
        y=frame.center_y + (frame.center.latitude - point.latitude) * frame.lat_scale,
    )


def from_plane(x: float, y: float, frame: SheetFrame) -> GeoPoint:
    """Inverse of ``to_plane``."""
    return offset_to_geo(x - frame.center_x, y - frame.center_y, frame)


def offset_to_geo(dx: float, dy: float, frame: SheetFrame) -> GeoPoint:
    """Geographic position of a pixel offset from the sheet center."""
    return GeoPoint(
        latitude=frame.center.latitude - dy / frame.lat_scale,
        longitude=frame.center.longitude + dx / frame.lon_scale,
    )


def project_along_bearing(origin: GeoPoint, azimuth: float, distance: float) -> GeoPoint:
    """
    Project a rhumb line out from ``origin``.

    The departure is converted to difference of longitude with the secant
    of the origin latitude; the difference of latitude is unscaled. Valid
    only for the tens of miles found on a single sight.

    Args:
        origin: Starting position
        azimuth: True bearing in radians
        distance: Distance in nautical miles (negative runs the reciprocal)

    Returns:
        GeoPoint at the end of the rhumb line
    """
    departure_in_lon = distance / math.cos(math.radians(origin.latitude))
    return GeoPoint(
        latitude=origin.latitude + math.cos(azimuth) * distance / MINUTES_PER_DEGREE,
        longitude=origin.longitude + math.sin(azimuth) * departure_in_lon / MINUTES_PER_DEGREE,
    )


def normalize_longitude(lon: float) -> float:
    """Wrap a longitude into [-180, 180]."""
    if -180.0 <= lon <= 180.0:
        return lon
    return (lon + 180.0) % 360.0 - 180.0
