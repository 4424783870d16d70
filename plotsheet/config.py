"""
Plotting sheet configuration models using Pydantic.

A sheet is described in YAML: the drawing surface, the sheet center, the
lines of position to plot (as the text a navigator would type) and the
drawing style. Every section is optional.
"""

from typing import List, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator


class ConfigError(ValueError):
    """Raised when a sheet configuration cannot be loaded."""


def _number_to_text(value):
    # YAML reads bare numbers such as 340 or -145 as int/float
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class SurfaceConfig(BaseModel):
    """Drawing surface dimensions."""

    width: float = Field(1200.0, gt=0, description="Width in device-independent pixels")
    height: float = Field(800.0, gt=0, description="Height in device-independent pixels")
    pixel_ratio: float = Field(1.0, gt=0, description="Device pixels per independent pixel")
    margin: float = Field(80.0, ge=0, description="Pixels left after fitting the latitude span")
    lat_span: float = Field(4.0, gt=0, description="Degrees of latitude over the sheet height")

    @model_validator(mode="after")
    def _check_margin(self) -> "SurfaceConfig":
        if self.height <= self.margin:
            raise ValueError(f"height {self.height:g} must exceed margin {self.margin:g}")
        return self


class CenterConfig(BaseModel):
    """Sheet center as field text."""

    latitude: str = Field("", description="Whole degrees of latitude, e.g. '35N'")
    longitude: str = Field("", description="Whole degrees of longitude, e.g. '145W'")

    coerce_text = field_validator("latitude", "longitude", mode="before")(_number_to_text)


class FixEntry(BaseModel):
    """One line of position as entered on the form."""

    distance: str = Field("", description="Intercept in nautical miles")
    direction: Literal["T", "A"] = Field("T", description="Toward or away")
    azimuth: str = Field("", description="Azimuth (Zn) in whole degrees")
    latitude: str = Field("", description="Assumed latitude in whole degrees")
    longitude: str = Field("", description="Assumed longitude with optional minutes")

    coerce_text = field_validator("distance", "azimuth", "latitude", "longitude", mode="before")(
        _number_to_text
    )


class StyleConfig(BaseModel):
    """Colors, widths and fonts of the sheet."""

    background: str = Field("black", description="Sheet background")
    grid: str = Field("#444", description="Grid line color")
    label: str = Field("#333", description="Grid label color")
    label_outline: str = Field("black", description="Outline behind latitude labels")
    knockout: str = Field("black", description="Knock-out stroke behind lines of position")
    near: str = Field("#3a736e", description="Intercept segment color")
    far: str = Field("#7BCCC4", description="Line of position color")
    marker: str = Field("white", description="Intersection marker color")
    font_size: float = Field(24.0, gt=0, description="Label font size in pixels")
    font_family: List[str] = Field(["Lato", "sans-serif"], description="Label font families")
    marker_radius: float = Field(10.0, gt=0, description="Intersection marker radius in pixels")
    knockout_width: float = Field(5.0, ge=0, description="Knock-out stroke width")
    line_width: float = Field(1.0, gt=0, description="Line of position stroke width")
    label_thinning_scale: float = Field(
        111.0, description="Below this many pixels per degree only every other longitude is labeled"
    )


class SheetConfig(BaseModel):
    """Complete plotting sheet configuration."""

    surface: SurfaceConfig = Field(default_factory=SurfaceConfig)
    center: CenterConfig = Field(default_factory=CenterConfig)
    fixes: List[FixEntry] = Field(default_factory=list)
    style: StyleConfig = Field(default_factory=StyleConfig)
    snap_radius: float = Field(10.0, gt=0, description="Pointer snap radius in pixels")

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "SheetConfig":
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigError: If the file is not valid YAML or fails validation
        """
        try:
            with open(yaml_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {yaml_path}: {e}") from e

        try:
            return cls(**(data or {}))
        except (TypeError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
