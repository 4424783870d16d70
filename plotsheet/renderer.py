"""
Plotting sheet renderer.

Paints the latitude/longitude grid, the lines of position and their
intersections onto a drawing surface. The surface used by the package is
a matplotlib figure whose axes map one data unit to one device-independent
pixel, with y growing downward like a canvas.
"""

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import matplotlib.patheffects as pe
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from .codec import format_integer_latitude, format_integer_longitude
from .config import StyleConfig
from .intersections import find_intersections
from .lines import Segment, build_fix_geometry, visible_segments
from .projection import normalize_longitude
from .schemas import FixLine, Intersection, SheetFrame

logger = logging.getLogger(__name__)

# Figure dots per inch at a pixel ratio of 1
BASE_DPI = 100.0
# matplotlib sizes are in points
POINTS_PER_PIXEL = 72.0 / BASE_DPI


class DrawingSurface(ABC):
    """Drawing primitives the renderer needs, in device-independent pixels."""

    @abstractmethod
    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        ...

    @abstractmethod
    def clear(self, color: str) -> None:
        ...

    @abstractmethod
    def stroke_segments(self, segments: Sequence[Segment], color: str, width: float) -> None:
        ...

    @abstractmethod
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        size: float,
        family: Sequence[str] = ("sans-serif",),
        outline: Optional[str] = None,
        outline_width: float = 3.0,
    ) -> None:
        ...

    @abstractmethod
    def stroke_circle(self, x: float, y: float, radius: float, color: str, width: float = 1.0) -> None:
        ...


class MatplotlibSurface(DrawingSurface):
    """
    DrawingSurface backed by a matplotlib Figure and the Agg canvas.

    The figure is ``width / BASE_DPI`` inches wide at
    ``BASE_DPI * pixel_ratio`` dpi, so the rendered image has
    ``width * pixel_ratio`` device pixels while drawing code keeps working in
    device-independent pixels.
    """

    def __init__(self, width: float, height: float, pixel_ratio: float = 1.0):
        self.figure = Figure()
        self.canvas = FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.resize(width, height, pixel_ratio)

    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        self.width = width
        self.height = height
        self.pixel_ratio = pixel_ratio
        self.figure.set_size_inches(width / BASE_DPI, height / BASE_DPI)
        self.figure.set_dpi(BASE_DPI * pixel_ratio)
        self._reset_axes()

    def _reset_axes(self) -> None:
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_axis_off()

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """Size of the rendered image in device pixels."""
        return (
            int(round(self.width * self.pixel_ratio)),
            int(round(self.height * self.pixel_ratio)),
        )

    def clear(self, color: str) -> None:
        self.ax.clear()
        self._reset_axes()
        self.figure.set_facecolor(color)
        self.ax.set_facecolor(color)

    def stroke_segments(self, segments: Sequence[Segment], color: str, width: float) -> None:
        if not segments:
            return
        self.ax.add_collection(LineCollection(
            [list(segment) for segment in segments],
            colors=color,
            linewidths=width * POINTS_PER_PIXEL,
            capstyle="butt",
        ))

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        size: float,
        family: Sequence[str] = ("sans-serif",),
        outline: Optional[str] = None,
        outline_width: float = 3.0,
    ) -> None:
        effects = None
        if outline:
            effects = [pe.withStroke(linewidth=outline_width * POINTS_PER_PIXEL, foreground=outline)]
        self.ax.text(
            x, y, text,
            color=color,
            fontsize=size * POINTS_PER_PIXEL,
            fontfamily=list(family),
            fontweight="light",
            ha="left",
            va="baseline",
            path_effects=effects,
        )

    def stroke_circle(self, x: float, y: float, radius: float, color: str, width: float = 1.0) -> None:
        self.ax.add_patch(Circle(
            (x, y), radius, fill=False, edgecolor=color, linewidth=width * POINTS_PER_PIXEL,
        ))

    def to_array(self) -> np.ndarray:
        """Render and return the RGBA pixels, shape (height, width, 4)."""
        self.canvas.draw()
        return np.asarray(self.canvas.buffer_rgba())

    def save(self, output_path) -> None:
        """Save the sheet as an image; the format follows the file suffix."""
        Path(output_path).parent.mkdir(exist_ok=True, parents=True)
        self.figure.savefig(
            output_path,
            dpi=self.figure.dpi,
            facecolor=self.figure.get_facecolor(),
        )


def grid_offsets(extent: float, scale: float) -> np.ndarray:
    """Whole-degree offsets from the center whose grid lines may be visible."""
    n = math.ceil(extent / scale / 2)
    return np.arange(-n, n + 1)


class SheetRenderer:
    """Draws a complete sheet onto a DrawingSurface."""

    def __init__(self, style: Optional[StyleConfig] = None):
        self.style = style or StyleConfig()

    def draw(self, frame: SheetFrame, fixes: Sequence[FixLine], surface: DrawingSurface) -> List[Intersection]:
        """
        Redraw the whole sheet.

        Args:
            frame: Current sheet frame
            fixes: Lines of position to draw
            surface: Surface to paint on

        Returns:
            Intersections drawn on the sheet
        """
        surface.clear(self.style.background)
        self.draw_grid(frame, surface)
        self.draw_fixes(frame, fixes, surface)

        intersections = find_intersections(fixes, frame)
        for intersection in intersections:
            surface.stroke_circle(
                frame.center_x + intersection.sheet_x,
                frame.center_y + intersection.sheet_y,
                self.style.marker_radius,
                self.style.marker,
            )

        logger.debug("Drew %d lines of position and %d intersections",
                     len(fixes), len(intersections))
        return intersections

    def draw_grid(self, frame: SheetFrame, surface: DrawingSurface) -> None:
        style = self.style
        width = frame.size.width
        height = frame.size.height
        ctr_x = frame.center_x
        ctr_y = frame.center_y

        latitudes = []
        for i in grid_offsets(height, frame.lat_scale):
            lat = frame.center.latitude + i
            y = ctr_y - i * frame.lat_scale
            if abs(lat) <= 90 and 0 <= y <= height:
                latitudes.append((lat, y))

        surface.stroke_segments([((0, y), (width, y)) for _, y in latitudes], style.grid, 1.0)

        lon_scale = frame.lon_scale
        longitude_lines = []
        for i in grid_offsets(width, lon_scale):
            x = ctr_x + i * lon_scale
            longitude_lines.append(((x, 0), (x, height)))
        surface.stroke_segments(longitude_lines, style.grid, 1.0)

        for i in grid_offsets(width, lon_scale):
            # crowded sheets label every other meridian
            if lon_scale < style.label_thinning_scale and i % 2:
                continue
            lon = normalize_longitude(frame.center.longitude + i)
            label = format_integer_longitude(lon).replace(" ", "")
            surface.fill_text(label, ctr_x + i * lon_scale + 3, height - 3,
                              style.label, style.font_size, style.font_family)

        for lat, y in latitudes:
            label = format_integer_latitude(lat).replace(" ", "")
            surface.fill_text(label, 1, y - 3, style.label, style.font_size, style.font_family,
                              outline=style.label_outline)

    def draw_fixes(self, frame: SheetFrame, fixes: Sequence[FixLine], surface: DrawingSurface) -> None:
        style = self.style
        near_segments = []
        far_segments = []
        for fix in fixes:
            near, far = visible_segments(build_fix_geometry(fix, frame), frame)
            if near is not None:
                near_segments.append(near)
            if far is not None:
                far_segments.append(far)

        if style.knockout_width > 0:
            surface.stroke_segments(near_segments + far_segments, style.knockout, style.knockout_width)
        surface.stroke_segments(near_segments, style.near, style.line_width)
        surface.stroke_segments(far_segments, style.far, style.line_width)
