"""Tests for plotsheet/renderer.py."""
import pytest

from plotsheet.config import StyleConfig
from plotsheet.projection import build_frame
from plotsheet.renderer import MatplotlibSurface, SheetRenderer, grid_offsets
from plotsheet.schemas import GeoPoint, SheetSize


def test_grid_offsets():
    assert list(grid_offsets(800, 180)) == [-3, -2, -1, 0, 1, 2, 3]
    assert list(grid_offsets(100, 100)) == [-1, 0, 1]


def test_draw_starts_with_clear(frame, surface):
    SheetRenderer().draw(frame, [], surface)
    assert surface.calls[0] == ("clear", "black")


def test_latitude_labels(frame, surface):
    SheetRenderer().draw(frame, [], surface)
    lat_labels = [call for call in surface.of_kind("text") if call[1].endswith(("N", "S"))]
    assert [call[1] for call in lat_labels] == ["33°N", "34°N", "35°N", "36°N", "37°N"]
    # left edge, just above the line, outlined
    label = lat_labels[2]
    assert label[2] == 1
    assert label[3] == pytest.approx(400 - 3)
    assert label[5] == "black"


def test_longitude_labels(frame, surface):
    SheetRenderer().draw(frame, [], surface)
    lon_labels = [call for call in surface.of_kind("text") if call[1].endswith(("E", "W"))]
    assert len(lon_labels) == 11
    assert lon_labels[0][1] == "150°W"
    assert lon_labels[5][1] == "145°W"
    assert lon_labels[5][2] == pytest.approx(603)
    assert lon_labels[5][3] == pytest.approx(800 - 3)
    assert lon_labels[5][5] is None


def test_longitude_labels_thinned_on_small_scale(center, surface):
    frame = build_frame(center, SheetSize(width=1200, height=400))
    assert frame.lon_scale < 111
    SheetRenderer().draw(frame, [], surface)
    assert "147°W" in surface.texts
    assert "145°W" in surface.texts
    assert "146°W" not in surface.texts
    assert "144°W" not in surface.texts


def test_thinning_threshold_from_style(center, surface):
    frame = build_frame(center, SheetSize(width=1200, height=400))
    SheetRenderer(StyleConfig(label_thinning_scale=0)).draw(frame, [], surface)
    assert "146°W" in surface.texts


def test_longitude_labels_wrap_antimeridian(surface):
    frame = build_frame(GeoPoint(latitude=0, longitude=179), SheetSize(width=1200, height=800))
    SheetRenderer().draw(frame, [], surface)
    assert "179°E" in surface.texts
    assert "180°E" in surface.texts
    assert "179°W" in surface.texts


def test_no_latitude_lines_past_pole(surface):
    frame = build_frame(GeoPoint(latitude=89, longitude=0), SheetSize(width=1200, height=800))
    SheetRenderer().draw(frame, [], surface)
    assert "90°N" in surface.texts
    assert "91°N" not in surface.texts


def test_grid_lines_span_sheet(frame, surface):
    SheetRenderer().draw(frame, [], surface)
    latitude_lines, longitude_lines = surface.of_kind("segments")[:2]
    assert latitude_lines[2] == "#444"
    assert all(seg[0][0] == 0 and seg[1][0] == 1200 for seg in latitude_lines[1])
    assert all(seg[0][1] == 0 and seg[1][1] == 800 for seg in longitude_lines[1])


def test_fix_layers(frame, surface, fix_a, fix_b):
    SheetRenderer().draw(frame, [fix_a, fix_b], surface)
    segments = surface.of_kind("segments")[2:]
    colors = [call[2] for call in segments]
    assert colors == ["black", "#3a736e", "#7BCCC4"]
    knockout, near, far = segments
    assert knockout[3] == 5
    assert len(knockout[1]) == 4
    assert len(near[1]) == 2
    assert len(far[1]) == 2


def test_no_knockout_when_width_zero(frame, surface, fix_a):
    SheetRenderer(StyleConfig(knockout_width=0)).draw(frame, [fix_a], surface)
    colors = [call[2] for call in surface.of_kind("segments")[2:]]
    assert colors == ["#3a736e", "#7BCCC4"]


def test_intersection_markers(frame, surface, fix_a, fix_b):
    intersections = SheetRenderer().draw(frame, [fix_a, fix_b], surface)
    circles = surface.of_kind("circle")
    assert len(intersections) == len(circles) == 1
    _, x, y, radius, color = circles[0]
    assert x == pytest.approx(frame.center_x + intersections[0].sheet_x)
    assert y == pytest.approx(frame.center_y + intersections[0].sheet_y)
    assert radius == 10
    assert color == "white"


def test_matplotlib_surface_pixels():
    surface = MatplotlibSurface(300, 200, pixel_ratio=2.0)
    assert surface.pixel_size == (600, 400)
    frame = build_frame(GeoPoint(latitude=10, longitude=20), SheetSize(width=300, height=200))
    SheetRenderer().draw(frame, [], surface)
    pixels = surface.to_array()
    assert pixels.shape == (400, 600, 4)


def test_matplotlib_surface_resize():
    surface = MatplotlibSurface(300, 200)
    surface.resize(500, 250, 1.0)
    assert surface.pixel_size == (500, 250)
    assert surface.ax.get_ylim() == (250, 0)


def test_matplotlib_surface_save(tmp_path, frame, fix_a, fix_b):
    surface = MatplotlibSurface(1200, 800)
    SheetRenderer().draw(frame, [fix_a, fix_b], surface)
    output = tmp_path / "out" / "sheet.png"
    surface.save(output)
    assert output.exists()
    assert output.read_bytes()[:4] == b"\x89PNG"
