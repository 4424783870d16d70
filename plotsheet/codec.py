"""
Angle codec for plotting sheet inputs.

Parses the latitude, longitude, azimuth and intercept text a navigator
types into normalized numbers, and formats numbers back into the canonical
text shown in the input fields. A parse never raises: it returns a
ParseResult that is either ok with a value or carries an error message.

Accepted latitude/longitude layouts (spaces are allowed between tokens,
``*`` may stand in for the degree sign)::

    35N   35 N   35°N   35° N   +35   -35   35°   35
    145 18W   145°18.5'W   -145° 18.5’   145 18

The empty string parses as zero (equator, prime meridian, zero bearing).
"""

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DIGITS = "0123456789"
DEGREE_MARKS = "°*"
MINUTE_MARKS = "'‘’"
SIGNS = "+-"
SPACES = " \t"


class ParseResult(BaseModel):
    """Tagged result of parsing one field."""

    model_config = ConfigDict(frozen=True)

    ok: bool = Field(..., description="Whether the text was accepted")
    value: Optional[float] = Field(None, description="Normalized value when ok")
    error: Optional[str] = Field(None, description="Reason the text was rejected")

    @classmethod
    def success(cls, value: float) -> "ParseResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(ok=False, error=error)


class Grammar(BaseModel):
    """Limits and direction letters of one degrees-and-direction field."""

    model_config = ConfigDict(frozen=True)

    name: str
    max_digits: int
    max_magnitude: float
    positive: str
    negative: str
    with_minutes: bool = False


INTEGER_LATITUDE = Grammar(name="latitude", max_digits=2, max_magnitude=89,
                           positive="N", negative="S")
INTEGER_LONGITUDE = Grammar(name="longitude", max_digits=3, max_magnitude=180,
                            positive="E", negative="W")
LATITUDE = Grammar(name="latitude", max_digits=2, max_magnitude=90,
                   positive="N", negative="S", with_minutes=True)
LONGITUDE = Grammar(name="longitude", max_digits=3, max_magnitude=180,
                    positive="E", negative="W", with_minutes=True)

MAX_AZIMUTH = 360


class _Scanner:
    """Cursor over upper-cased, trimmed input text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_spaces(self) -> None:
        while self.peek() and self.peek() in SPACES:
            self.pos += 1

    def accept(self, chars: str) -> str:
        """Consume one character from ``chars`` if it is next."""
        ch = self.peek()
        if ch and ch in chars:
            self.pos += 1
            return ch
        return ""

    def digits(self, limit: Optional[int] = None) -> str:
        """Consume up to ``limit`` digits (unbounded when None)."""
        start = self.pos
        while self.peek() and self.peek() in DIGITS:
            if limit is not None and self.pos - start >= limit:
                break
            self.pos += 1
        return self.text[start:self.pos]

    def next_is_digit(self) -> bool:
        ch = self.peek()
        return bool(ch) and ch in DIGITS


def _normalize(text: str) -> str:
    return text.strip().upper()


def _scan_minutes(scanner: _Scanner) -> Optional[float]:
    """Scan ``MM`` or ``MM.M`` plus an optional minute mark; None on bad syntax."""
    whole = scanner.digits(2)
    if scanner.next_is_digit():
        return None
    tenths = ""
    if scanner.accept("."):
        tenths = scanner.digits(1)
        if not tenths or scanner.next_is_digit():
            return None
    scanner.skip_spaces()
    scanner.accept(MINUTE_MARKS)
    scanner.skip_spaces()
    return float(whole + "." + tenths) if tenths else float(whole)


def parse_degrees(text: str, grammar: Grammar) -> ParseResult:
    """
    Parse degrees (and optionally minutes) with a direction letter or sign.

    Args:
        text: Raw field text
        grammar: Field limits and direction letters

    Returns:
        ParseResult holding signed decimal degrees, direction folded into sign
    """
    s = _normalize(text)
    if not s:
        return ParseResult.success(0.0)

    scanner = _Scanner(s)
    sign = scanner.accept(SIGNS)
    scanner.skip_spaces()

    degrees = scanner.digits(grammar.max_digits)
    if not degrees:
        return ParseResult.failure(f"Expected degrees of {grammar.name}")
    if scanner.next_is_digit():
        return ParseResult.failure(
            f"Degrees of {grammar.name} have at most {grammar.max_digits} digits"
        )

    scanner.skip_spaces()
    scanner.accept(DEGREE_MARKS)
    scanner.skip_spaces()

    minutes = 0.0
    if grammar.with_minutes and scanner.next_is_digit():
        scanned = _scan_minutes(scanner)
        if scanned is None:
            return ParseResult.failure("Minutes must be MM or MM.M")
        if scanned >= 60:
            return ParseResult.failure("Minutes must be less than 60")
        minutes = scanned

    letter = scanner.accept(grammar.positive + grammar.negative)
    if letter and sign:
        return ParseResult.failure("Use either a sign or a direction letter, not both")
    scanner.skip_spaces()
    if not scanner.at_end():
        return ParseResult.failure(f"Unexpected '{scanner.peek()}' in {grammar.name}")

    magnitude = int(degrees) + minutes / 60
    if magnitude > grammar.max_magnitude:
        return ParseResult.failure(
            f"Magnitude of {grammar.name} exceeds {grammar.max_magnitude:g}°"
        )

    if letter:
        positive = letter == grammar.positive
    else:
        positive = sign != "-"

    if positive or magnitude == 0:
        return ParseResult.success(magnitude)
    return ParseResult.success(-magnitude)


def parse_integer_latitude(text: str) -> ParseResult:
    """Parse whole degrees of latitude, e.g. ``35N`` or ``-12``."""
    return parse_degrees(text, INTEGER_LATITUDE)


def parse_integer_longitude(text: str) -> ParseResult:
    """Parse whole degrees of longitude, e.g. ``145W`` or ``+7``."""
    return parse_degrees(text, INTEGER_LONGITUDE)


def parse_latitude(text: str) -> ParseResult:
    """Parse latitude with optional minutes, e.g. ``35 14.1 N``."""
    return parse_degrees(text, LATITUDE)


def parse_longitude(text: str) -> ParseResult:
    """Parse longitude with optional minutes, e.g. ``145°18'W``."""
    return parse_degrees(text, LONGITUDE)


def parse_distance(text: str) -> ParseResult:
    """
    Parse an unsigned intercept in nautical miles.

    Accepts a decimal number with an optional trailing minute mark
    (``20``, ``12.5'``). The sign comes from the toward/away toggle.
    """
    s = _normalize(text)
    if not s:
        return ParseResult.success(0.0)

    scanner = _Scanner(s)
    whole = scanner.digits()
    if not whole:
        return ParseResult.failure("Expected a distance in nautical miles")
    fraction = ""
    if scanner.accept("."):
        fraction = scanner.digits()
        if not fraction:
            return ParseResult.failure("Expected digits after the decimal point")
    scanner.skip_spaces()
    scanner.accept(MINUTE_MARKS)
    if not scanner.at_end():
        return ParseResult.failure(f"Unexpected '{scanner.peek()}' in distance")

    return ParseResult.success(float(whole + "." + fraction) if fraction else float(whole))


def parse_azimuth(text: str) -> ParseResult:
    """
    Parse an azimuth in whole degrees and return radians in [0, 2π).

    Accepts one to three digits with an optional degree mark, at most 360.
    """
    s = _normalize(text)
    if not s:
        return ParseResult.success(0.0)

    scanner = _Scanner(s)
    degrees = scanner.digits(3)
    if not degrees:
        return ParseResult.failure("Expected an azimuth in degrees")
    if scanner.next_is_digit():
        return ParseResult.failure("Azimuth has at most 3 digits")
    scanner.skip_spaces()
    scanner.accept(DEGREE_MARKS)
    if not scanner.at_end():
        return ParseResult.failure(f"Unexpected '{scanner.peek()}' in azimuth")

    value = int(degrees)
    if value > MAX_AZIMUTH:
        return ParseResult.failure(f"Azimuth exceeds {MAX_AZIMUTH}°")
    return ParseResult.success(math.radians(value) % (2 * math.pi))


def _direction(negative: bool, grammar: Grammar) -> str:
    return grammar.negative if negative else grammar.positive


def format_degrees(deg: float, grammar: Grammar) -> str:
    """Format whole degrees as ``DD° N``; zero counts as positive."""
    rounded = int(round(abs(deg)))
    return f"{rounded:0{grammar.max_digits}d}° {_direction(deg < 0 and rounded != 0, grammar)}"


def format_degrees_minutes(deg: float, grammar: Grammar) -> str:
    """Format degrees and tenths of minutes as ``DDD° MM.M’ W``."""
    tenths = int(round(abs(deg) * 600))
    whole, rest = divmod(tenths, 600)
    return (
        f"{whole:0{grammar.max_digits}d}° {rest / 10:04.1f}’ "
        f"{_direction(deg < 0 and tenths != 0, grammar)}"
    )


def format_integer_latitude(deg: float) -> str:
    return format_degrees(deg, INTEGER_LATITUDE)


def format_integer_longitude(deg: float) -> str:
    return format_degrees(deg, INTEGER_LONGITUDE)


def format_latitude(deg: float) -> str:
    return format_degrees_minutes(deg, LATITUDE)


def format_longitude(deg: float) -> str:
    return format_degrees_minutes(deg, LONGITUDE)


def format_distance(nm: float) -> str:
    """Format an intercept magnitude as ``20.0’``."""
    return f"{abs(nm):.1f}’"


def format_azimuth(radians: float) -> str:
    """Format an azimuth given in radians as ``340°``."""
    return f"{int(round(math.degrees(radians))) % 360:03d}°"


def format_position(point) -> str:
    """Format a GeoPoint for the coordinate readout."""
    return f"{format_latitude(point.latitude)}  {format_longitude(point.longitude)}"
