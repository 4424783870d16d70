"""
Export of plotted lines of position and fixes.

Lines of position become GeoJSON LineStrings clipped to the sheet and
intersections become Points; intersections can also be written as CSV.
"""

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from .codec import format_azimuth, format_distance, format_latitude, format_longitude
from .lines import fix_line_coordinates
from .schemas import FixLine, Intersection, SheetFrame


def fix_feature(fix: FixLine, frame: SheetFrame, number: int) -> Dict[str, Any]:
    """GeoJSON Feature for one line of position."""
    position = fix.assumed_position
    return {
        "type": "Feature",
        "properties": {
            "kind": "line_of_position",
            "number": number,
            "distance": fix.distance,
            "direction": "toward" if fix.distance >= 0 else "away",
            "azimuth": round(math.degrees(fix.azimuth), 6),
            "label": f"{format_distance(fix.distance)} {'T' if fix.distance >= 0 else 'A'} "
                     f"{format_azimuth(fix.azimuth)}",
            "assumed_latitude": position.latitude,
            "assumed_longitude": position.longitude,
        },
        "geometry": {
            "type": "LineString",
            "coordinates": fix_line_coordinates(fix, frame),
        },
    }


def intersection_feature(intersection: Intersection) -> Dict[str, Any]:
    """GeoJSON Feature for one intersection."""
    geo = intersection.geo
    return {
        "type": "Feature",
        "properties": {
            "kind": "intersection",
            "lines": [intersection.pair[0] + 1, intersection.pair[1] + 1],
            "label": f"{format_latitude(geo.latitude)}  {format_longitude(geo.longitude)}",
        },
        "geometry": {
            "type": "Point",
            "coordinates": [geo.longitude, geo.latitude],
        },
    }


def sheet_to_geojson(
    fixes: Sequence[FixLine],
    intersections: Sequence[Intersection],
    frame: SheetFrame,
) -> Dict[str, Any]:
    """
    Convert the plotted sheet to a GeoJSON FeatureCollection.

    Lines that miss the sheet are exported with empty coordinates so the
    feature numbers still match the order the lines were added.

    Args:
        fixes: Lines of position in the order they were added
        intersections: Intersections from the last redraw
        frame: Current sheet frame

    Returns:
        GeoJSON FeatureCollection as dictionary
    """
    features = [fix_feature(fix, frame, number) for number, fix in enumerate(fixes, start=1)]
    features.extend(intersection_feature(intersection) for intersection in intersections)
    return {
        "type": "FeatureCollection",
        "properties": {
            "center": [frame.center.longitude, frame.center.latitude],
            "lat_scale": frame.lat_scale,
            "lon_scale": frame.lon_scale,
        },
        "features": features,
    }


def save_geojson(data: Dict[str, Any], output_path: str) -> None:
    """
    Save GeoJSON data to a file.

    Args:
        data: GeoJSON data as dictionary
        output_path: Path to save the GeoJSON file
    """
    output_dir = Path(output_path).parent
    output_dir.mkdir(exist_ok=True, parents=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def intersections_to_frame(intersections: Sequence[Intersection]) -> pd.DataFrame:
    """Tabulate intersections, one row per pair of lines."""
    rows: List[Dict[str, Any]] = []
    for intersection in intersections:
        geo = intersection.geo
        rows.append({
            "line_a": intersection.pair[0] + 1,
            "line_b": intersection.pair[1] + 1,
            "latitude": geo.latitude,
            "longitude": geo.longitude,
            "latitude_text": format_latitude(geo.latitude),
            "longitude_text": format_longitude(geo.longitude),
            "sheet_x": intersection.sheet_x,
            "sheet_y": intersection.sheet_y,
        })
    columns = ["line_a", "line_b", "latitude", "longitude",
               "latitude_text", "longitude_text", "sheet_x", "sheet_y"]
    return pd.DataFrame(rows, columns=columns)


def save_intersections_csv(intersections: Sequence[Intersection], output_path: str) -> None:
    Path(output_path).parent.mkdir(exist_ok=True, parents=True)
    intersections_to_frame(intersections).to_csv(output_path, index=False)
