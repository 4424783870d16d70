"""Tests for the plot_sheet command line."""
import argparse
import json
from pathlib import Path

import pytest

from plot_sheet import build_config, main, parse_arguments, parse_fix_argument

SAMPLE_CONFIG = str(Path(__file__).resolve().parent.parent / "config" / "plotting_sheet.yaml")
FIX_A = "20,T,340,35N,145 18 W"
FIX_B = "30,T,240,35N,144 50 W"


def test_parse_fix_argument():
    entry = parse_fix_argument(" 20 , a ,340,35N,145 18 W")
    assert entry.distance == "20"
    assert entry.direction == "A"
    assert entry.longitude == "145 18 W"


@pytest.mark.parametrize("value", ["20,T,340,35N", "20,X,340,35N,145W"])
def test_parse_fix_argument_rejects(value):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_fix_argument(value)


def test_bad_fix_format_exits():
    with pytest.raises(SystemExit):
        parse_arguments(["--fix", "20,T"])


def test_build_config_overrides():
    args = parse_arguments([
        "--config", SAMPLE_CONFIG,
        "--center-lat", "36N", "--width", "900", "--fix", "5,A,10,36N,145W",
    ])
    config = build_config(args)
    assert config.center.latitude == "36N"
    assert config.center.longitude == "145W"
    assert config.surface.width == 900
    assert config.surface.height == 800
    assert len(config.fixes) == 3
    assert config.fixes[-1].direction == "A"


def test_build_config_rejects_bad_override():
    args = parse_arguments(["--width", "-10"])
    with pytest.raises(ValueError):
        build_config(args)


def test_main_two_star_fix(tmp_path, capsys):
    geojson = tmp_path / "sheet.geojson"
    csv = tmp_path / "fixes.csv"
    code = main([
        "--center-lat", "35N", "--center-lon", "145W",
        "--fix", FIX_A, "--fix", FIX_B,
        "--geojson", str(geojson), "--csv", str(csv),
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "✓ Sheet centered on 35° N 145° W" in out
    assert "2 lines of position, 1 intersections" in out
    assert "1 x 2: 35° 14.1’ N  145° 42.2’ W" in out
    assert len(json.loads(geojson.read_text(encoding="utf-8"))["features"]) == 3
    assert csv.exists()


def test_main_pointer_readout(capsys):
    code = main(["--center-lat", "35N", "--center-lon", "145W", "--pointer", "600", "310"])
    assert code == 0
    assert "Pointer: 35° 30.0’ N  145° 00.0’ W" in capsys.readouterr().out


def test_main_saves_image(tmp_path):
    output = tmp_path / "sheet.png"
    code = main(["--config", SAMPLE_CONFIG, "--pixel-ratio", "1",
                 "--output", str(output)])
    assert code == 0
    assert output.exists()


def test_main_invalid_fix(capsys):
    code = main(["--fix", "20,T,400,35N,145W"])
    assert code == 1
    assert "✗ Invalid azimuth '400'" in capsys.readouterr().out


def test_main_invalid_center(capsys):
    assert main(["--center-lat", "100N"]) == 1
    assert "✗" in capsys.readouterr().out


def test_main_missing_config(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
    assert "Configuration file not found" in capsys.readouterr().out


def test_main_log_file(tmp_path, capsys):
    log_file = tmp_path / "plot.log"
    code = main(["--fix", FIX_A, "--log-level", "INFO", "--log-file", str(log_file)])
    assert code == 0
    assert "Added line of position 1" in log_file.read_text(encoding="utf-8")
    assert "Added line of position" not in capsys.readouterr().out
