"""
Plotting sheet data models using Pydantic.

These models define geographic points, the sheet frame that maps them
onto the drawing surface, lines of position and their intersections.
"""

import math
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class GeoPoint(BaseModel):
    """
    A geographic position in decimal degrees.

    Positions read off the sheet edge may stray slightly past the poles or
    the antimeridian, so the ranges are not enforced here.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(0.0, description="Latitude in [-90, 90], positive north")
    longitude: float = Field(0.0, description="Longitude in [-180, 180], positive east")


class PlanePoint(BaseModel):
    """A point on the drawing surface in device-independent pixels."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., description="Pixels from the left edge")
    y: float = Field(..., description="Pixels from the top edge")

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class SheetSize(BaseModel):
    """Drawing surface size in device-independent pixels."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0, description="Sheet width in pixels")
    height: float = Field(..., gt=0, description="Sheet height in pixels")


class SheetFrame(BaseModel):
    """
    Mapping between geographic coordinates and the sheet.

    The longitude scale is always derived from the latitude scale and the
    center latitude, so a frame is replaced rather than edited whenever the
    center or the viewport changes.
    """

    model_config = ConfigDict(frozen=True)

    center: GeoPoint = Field(..., description="Geographic position at the sheet center")
    lat_scale: float = Field(..., description="Pixels per degree of latitude")
    size: SheetSize = Field(..., description="Sheet size in pixels")

    @property
    def lon_scale(self) -> float:
        """Pixels per degree of longitude at the center latitude."""
        return self.lat_scale * math.cos(math.radians(self.center.latitude))

    @property
    def center_x(self) -> float:
        return self.size.width / 2

    @property
    def center_y(self) -> float:
        return self.size.height / 2

    def contains(self, point: PlanePoint) -> bool:
        """True when the point lies on the sheet, edges included."""
        return 0 <= point.x <= self.size.width and 0 <= point.y <= self.size.height


class FixLine(BaseModel):
    """A line of position derived from one sight reduction."""

    model_config = ConfigDict(frozen=True)

    distance: float = Field(..., description="Intercept in nautical miles, negative when away")
    azimuth: float = Field(..., ge=0.0, lt=2 * math.pi, description="Azimuth (Zn) in radians")
    assumed_position: GeoPoint = Field(..., description="Assumed position of the observer")


class FixGeometry(BaseModel):
    """Plane coordinates needed to draw one line of position."""

    model_config = ConfigDict(frozen=True)

    anchor: PlanePoint = Field(..., description="Assumed position")
    near: PlanePoint = Field(..., description="Assumed position advanced by the intercept")
    far_start: PlanePoint = Field(..., description="One sheet width to the left of the near point")
    far_end: PlanePoint = Field(..., description="One sheet width to the right of the near point")


class Intersection(BaseModel):
    """An intersection between two lines of position."""

    model_config = ConfigDict(frozen=True)

    sheet_x: float = Field(..., description="Pixels right of the sheet center")
    sheet_y: float = Field(..., description="Pixels below the sheet center")
    geo: GeoPoint = Field(..., description="Geographic position of the intersection")
    pair: Tuple[int, int] = Field(..., description="Indices of the intersecting fixes")


FieldStatus = Literal["unset", "invalid", "valid"]


class DraftField(BaseModel):
    """State of one input of the line being composed."""

    model_config = ConfigDict(frozen=True)

    status: FieldStatus = Field("unset", description="Unset, invalid or holding a value")
    value: Optional[float] = Field(None, description="Normalized value when valid")
    text: str = Field("", description="Canonical text, or the rejected text when invalid")

    @classmethod
    def valid(cls, value: float, text: str) -> "DraftField":
        return cls(status="valid", value=value, text=text)

    @classmethod
    def invalid(cls, text: str) -> "DraftField":
        return cls(status="invalid", value=None, text=text)

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"


class FieldUpdate(BaseModel):
    """Outcome of committing one input field."""

    ok: bool = Field(..., description="Whether the text parsed")
    text: str = Field(..., description="Text to show in the field")
    error: Optional[str] = Field(None, description="Why the text was rejected")


class Readout(BaseModel):
    """Coordinate readout under the pointer."""

    geo: GeoPoint = Field(..., description="Position under the pointer")
    text: str = Field(..., description="Formatted latitude and longitude")
    snapped: bool = Field(False, description="Whether the pointer snapped to an intersection")
