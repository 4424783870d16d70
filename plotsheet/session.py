"""
Plotting session.

Owns the state of one plotting sheet (sheet center, frame, lines of
position, the draft line and the last set of intersections) and exposes
one method per user interface event. Each method runs to completion and
redraws the sheet when the state it changes is visible.
"""

import logging
import math
from typing import List, Optional

from .codec import (
    format_integer_latitude,
    format_integer_longitude,
    format_position,
    parse_integer_latitude,
    parse_integer_longitude,
)
from .config import ConfigError, FixEntry, SheetConfig
from .draft import DraftFix, Direction
from .intersections import nearest_intersection
from .projection import build_frame, normalize_longitude, offset_to_geo
from .renderer import DrawingSurface, MatplotlibSurface, SheetRenderer
from .schemas import FieldUpdate, FixLine, GeoPoint, Intersection, Readout, SheetFrame, SheetSize

logger = logging.getLogger(__name__)


class PlottingSession:
    """State and event handlers of one plotting sheet."""

    def __init__(self, config: Optional[SheetConfig] = None, surface: Optional[DrawingSurface] = None):
        self.config = config or SheetConfig()
        surface_config = self.config.surface

        self.surface = surface or MatplotlibSurface(
            surface_config.width, surface_config.height, surface_config.pixel_ratio
        )
        self.renderer = SheetRenderer(self.config.style)
        self.size = SheetSize(width=surface_config.width, height=surface_config.height)
        self.pixel_ratio = surface_config.pixel_ratio
        self.center = GeoPoint()
        self.frame = self._build_frame()
        self.fixes: List[FixLine] = []
        self.draft = DraftFix()
        self.intersections: List[Intersection] = []
        self.readout: Optional[Readout] = None

        center = self.config.center
        for name, text, edit in (
            ("latitude", center.latitude, self.edit_center_latitude),
            ("longitude", center.longitude, self.edit_center_longitude),
        ):
            update = edit(text)
            if not update.ok:
                raise ConfigError(f"Invalid center {name} {text!r}: {update.error}")

        # blank form fields read as zero, so a fresh sheet can add a line at once
        for edit in (self.draft.edit_distance, self.draft.edit_azimuth,
                     self.draft.edit_assumed_latitude, self.draft.edit_assumed_longitude):
            edit("")

        for number, entry in enumerate(self.config.fixes, start=1):
            self.add_fix_entry(entry, number)

    def _build_frame(self) -> SheetFrame:
        return build_frame(
            self.center, self.size, self.config.surface.margin, self.config.surface.lat_span
        )

    def redraw(self) -> List[Intersection]:
        """Rebuild the frame and repaint the sheet."""
        self.frame = self._build_frame()
        self.intersections = self.renderer.draw(self.frame, self.fixes, self.surface)
        return self.intersections

    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        """Viewport resize event."""
        self.size = SheetSize(width=width, height=height)
        self.pixel_ratio = pixel_ratio
        self.surface.resize(width, height, pixel_ratio)
        self.redraw()

    def edit_center_latitude(self, text: str) -> FieldUpdate:
        result = parse_integer_latitude(text)
        if not result.ok:
            logger.debug("Rejected center latitude %r: %s", text, result.error)
            return FieldUpdate(ok=False, text=text, error=result.error)
        self.center = GeoPoint(latitude=result.value, longitude=self.center.longitude)
        self.redraw()
        return FieldUpdate(ok=True, text=format_integer_latitude(result.value))

    def edit_center_longitude(self, text: str) -> FieldUpdate:
        result = parse_integer_longitude(text)
        if not result.ok:
            logger.debug("Rejected center longitude %r: %s", text, result.error)
            return FieldUpdate(ok=False, text=text, error=result.error)
        self.center = GeoPoint(latitude=self.center.latitude, longitude=result.value)
        self.redraw()
        return FieldUpdate(ok=True, text=format_integer_longitude(result.value))

    def edit_distance(self, text: str) -> FieldUpdate:
        return self.draft.edit_distance(text)

    def set_direction(self, direction: Direction) -> FieldUpdate:
        return self.draft.set_direction(direction)

    def edit_azimuth(self, text: str) -> FieldUpdate:
        return self.draft.edit_azimuth(text)

    def edit_assumed_latitude(self, text: str) -> FieldUpdate:
        return self.draft.edit_assumed_latitude(text)

    def edit_assumed_longitude(self, text: str) -> FieldUpdate:
        return self.draft.edit_assumed_longitude(text)

    @property
    def can_add(self) -> bool:
        return self.draft.can_add

    def add_fix(self) -> FixLine:
        """Add control activated: append the draft line and redraw."""
        fix = self.draft.commit()
        self.fixes.append(fix)
        logger.info("Added line of position %d: %+.1f NM, Zn %03.0f°",
                    len(self.fixes), fix.distance, math.degrees(fix.azimuth))
        self.redraw()
        return fix

    def add_fix_entry(self, entry: FixEntry, number: int = 0) -> FixLine:
        """
        Enter a whole line of position as form text and add it.

        Raises:
            ConfigError: If any field of the entry does not parse
        """
        self.draft.set_direction(entry.direction)
        for name, text, edit in (
            ("distance", entry.distance, self.draft.edit_distance),
            ("azimuth", entry.azimuth, self.draft.edit_azimuth),
            ("latitude", entry.latitude, self.draft.edit_assumed_latitude),
            ("longitude", entry.longitude, self.draft.edit_assumed_longitude),
        ):
            update = edit(text)
            if not update.ok:
                raise ConfigError(
                    f"Invalid {name} {text!r} in line of position {number or len(self.fixes) + 1}: "
                    f"{update.error}"
                )
        return self.add_fix()

    def pointer_moved(self, x: float, y: float) -> Readout:
        """
        Pointer moved over the sheet.

        Args:
            x: Pointer position in pixels from the left edge
            y: Pointer position in pixels from the top edge

        Returns:
            Readout snapped to a nearby intersection, else the raw position
        """
        dx = x - self.frame.center_x
        dy = y - self.frame.center_y

        snapped = nearest_intersection(dx, dy, self.intersections, self.config.snap_radius)
        if snapped is not None:
            dx, dy = snapped.sheet_x, snapped.sheet_y

        geo = offset_to_geo(dx, dy, self.frame)
        geo = GeoPoint(latitude=geo.latitude, longitude=normalize_longitude(geo.longitude))
        self.readout = Readout(geo=geo, text=format_position(geo), snapped=snapped is not None)
        return self.readout

    def pointer_left(self) -> None:
        self.readout = None

    @property
    def readout_text(self) -> str:
        return self.readout.text if self.readout else ""

    def save(self, output_path) -> None:
        """Save the current sheet image."""
        if not isinstance(self.surface, MatplotlibSurface):
            raise TypeError("Only a MatplotlibSurface can be saved")
        self.surface.save(output_path)
