"""Shared test fixtures for plotting sheet tests."""
import math

import pytest

from plotsheet.projection import build_frame
from plotsheet.renderer import DrawingSurface
from plotsheet.schemas import FixLine, GeoPoint, SheetSize


class RecordingSurface(DrawingSurface):
    """DrawingSurface that records every primitive call."""

    def __init__(self, width=1200.0, height=800.0, pixel_ratio=1.0):
        self.calls = []
        self.resize(width, height, pixel_ratio)

    def resize(self, width, height, pixel_ratio=1.0):
        self.width, self.height, self.pixel_ratio = width, height, pixel_ratio
        self.calls.append(("resize", width, height, pixel_ratio))

    def clear(self, color):
        self.calls = [("clear", color)]

    def stroke_segments(self, segments, color, width):
        self.calls.append(("segments", list(segments), color, width))

    def fill_text(self, text, x, y, color, size, family=("sans-serif",), outline=None,
                  outline_width=3.0):
        self.calls.append(("text", text, x, y, color, outline))

    def stroke_circle(self, x, y, radius, color, width=1.0):
        self.calls.append(("circle", x, y, radius, color))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]

    @property
    def texts(self):
        return [call[1] for call in self.of_kind("text")]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def center():
    """Sheet center 35N 145W."""
    return GeoPoint(latitude=35, longitude=-145)


@pytest.fixture
def frame(center):
    """1200x800 sheet on 35N 145W."""
    return build_frame(center, SheetSize(width=1200, height=800))


@pytest.fixture
def fix_a():
    """20 NM toward 340 from 35N 145 18W."""
    return FixLine(
        distance=20,
        azimuth=math.radians(340),
        assumed_position=GeoPoint(latitude=35, longitude=-(145 + 18 / 60)),
    )


@pytest.fixture
def fix_b():
    """30 NM toward 240 from 35N 144 50W."""
    return FixLine(
        distance=30,
        azimuth=math.radians(240),
        assumed_position=GeoPoint(latitude=35, longitude=-(144 + 50 / 60)),
    )


@pytest.fixture
def expected_fix():
    """Intersection of fix_a and fix_b, 35 14.1N 145 42.2W."""
    return GeoPoint(latitude=35.2345, longitude=-145.7034)
