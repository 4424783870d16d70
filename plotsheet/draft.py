"""
Draft line of position.

Holds the four inputs of the line being composed. Each input is
independently unset, invalid or valid; a new FixLine can be added only
when all four are valid and something was edited since the last add.
"""

import logging
from typing import Callable, Dict, Literal

from .codec import (
    ParseResult,
    format_azimuth,
    format_distance,
    format_integer_latitude,
    format_longitude,
    parse_azimuth,
    parse_distance,
    parse_integer_latitude,
    parse_longitude,
)
from .schemas import DraftField, FieldUpdate, FixLine, GeoPoint

logger = logging.getLogger(__name__)

Direction = Literal["T", "A"]

FIELD_NAMES = ("distance", "azimuth", "assumed_latitude", "assumed_longitude")


class DraftIncompleteError(ValueError):
    """Raised when a draft is committed before all fields are valid."""


class DraftFix:
    """Mutable staging area for the next line of position."""

    def __init__(self):
        self.fields: Dict[str, DraftField] = {name: DraftField() for name in FIELD_NAMES}
        self.direction: Direction = "T"
        self._distance_text = ""
        self._armed = False

    def _commit_field(
        self,
        name: str,
        text: str,
        parse: Callable[[str], ParseResult],
        fmt: Callable[[float], str],
        keep_empty: bool = False,
    ) -> FieldUpdate:
        result = parse(text)
        self._armed = True
        if not result.ok:
            logger.debug("Rejected %s %r: %s", name, text, result.error)
            self.fields[name] = DraftField.invalid(text)
            return FieldUpdate(ok=False, text=text, error=result.error)

        canonical = "" if keep_empty and not text.strip() else fmt(result.value)
        self.fields[name] = DraftField.valid(result.value, canonical)
        return FieldUpdate(ok=True, text=canonical)

    def edit_distance(self, text: str) -> FieldUpdate:
        """Commit the intercept magnitude; its sign follows the direction toggle."""
        self._distance_text = text
        result = parse_distance(text)
        self._armed = True
        if not result.ok:
            logger.debug("Rejected distance %r: %s", text, result.error)
            self.fields["distance"] = DraftField.invalid(text)
            return FieldUpdate(ok=False, text=text, error=result.error)

        # an empty field stays empty in the UI
        canonical = format_distance(result.value) if text.strip() else ""
        signed = result.value if self.direction == "T" else -result.value
        self.fields["distance"] = DraftField.valid(signed, canonical)
        return FieldUpdate(ok=True, text=canonical)

    def set_direction(self, direction: Direction) -> FieldUpdate:
        """Switch between toward and away and re-read the distance."""
        if direction not in ("T", "A"):
            raise ValueError(f"Direction must be 'T' or 'A', not {direction!r}")
        self.direction = direction
        return self.edit_distance(self._distance_text)

    def edit_azimuth(self, text: str) -> FieldUpdate:
        return self._commit_field("azimuth", text, parse_azimuth, format_azimuth, keep_empty=True)

    def edit_assumed_latitude(self, text: str) -> FieldUpdate:
        return self._commit_field("assumed_latitude", text, parse_integer_latitude,
                                  format_integer_latitude)

    def edit_assumed_longitude(self, text: str) -> FieldUpdate:
        return self._commit_field("assumed_longitude", text, parse_longitude, format_longitude)

    @property
    def complete(self) -> bool:
        return all(field.is_valid for field in self.fields.values())

    @property
    def can_add(self) -> bool:
        """Whether the Add control is enabled."""
        return self._armed and self.complete

    def commit(self) -> FixLine:
        """
        Build a FixLine from the current values.

        The field values are kept so the next line can reuse the assumed
        position; the Add control stays disabled until another edit.

        Raises:
            DraftIncompleteError: If any field is unset or invalid
        """
        if not self.can_add:
            missing = [name for name, field in self.fields.items() if not field.is_valid]
            raise DraftIncompleteError(
                f"Cannot add line of position; not ready: {', '.join(missing) or 'no edits'}"
            )

        fix = FixLine(
            distance=self.fields["distance"].value,
            azimuth=self.fields["azimuth"].value,
            assumed_position=GeoPoint(
                latitude=self.fields["assumed_latitude"].value,
                longitude=self.fields["assumed_longitude"].value,
            ),
        )
        self._armed = False
        return fix
