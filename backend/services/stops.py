from models.stop import (
    ClassifiedStop,
    CoordinateStop,
    PostalCodeStop,
    CityStateStop,
    StreetAddressStop,
)
from typing import Any, Iterable, List, Optional
import math
import re
import string

_ASCII_DIGITS = set(string.digits)
_ASCII_UPPER = set(string.ascii_uppercase)

# Leading decimal number; trailing text such as " N" or ", USA" is ignored.
_NUMBER_PREFIX = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _to_finite(value: str) -> Optional[float]:
    match = _NUMBER_PREFIX.match(value.strip())
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def _all_digits(value: str) -> bool:
    return bool(value) and all(ch in _ASCII_DIGITS for ch in value)


def _parse_coordinate(s: str, label: str) -> Optional[CoordinateStop]:
    head, sep, tail = s.partition(",")
    if not sep:
        return None
    lat = _to_finite(head)
    lon = _to_finite(tail)
    if lat is None or lon is None:
        return None
    return CoordinateStop(label=label, lat=lat, lon=lon)


def _parse_postal_code(s: str, label: str) -> Optional[PostalCodeStop]:
    digits = s.replace("-", "")
    if not _all_digits(digits):
        return None
    is_zip5 = len(s) == 5 and len(digits) == 5
    is_zip9 = len(s) == 10 and s[5] == "-" and len(digits) == 9
    if is_zip5 or is_zip9:
        return PostalCodeStop(label=label, code=s)
    return None


def _parse_city_state(s: str, label: str) -> Optional[CityStateStop]:
    if "," not in s:
        return None
    parts = s.split(",")
    city = parts[0].strip()
    state = parts[1].strip().upper()
    if city and len(state) == 2 and all(ch in _ASCII_UPPER for ch in state):
        return CityStateStop(label=label, city=city, state=state)
    return None


def classify_stop(raw: Any, index: int) -> ClassifiedStop:
    """Classify one free-form stop string.

    Rules are tried in priority order: "lat, lon" coordinate pair, US ZIP or
    ZIP+4, "City, ST", then street address. Never fails; anything unrecognised
    becomes a street address and the routing service has the final say.

    ``index`` is zero-based; the label is "Stop {index + 1}".
    """
    s = str(raw).strip()
    label = f"Stop {index + 1}"

    # A comma-separated pair of numbers wins even when it looks like "12345, 67".
    return (
        _parse_coordinate(s, label)
        or _parse_postal_code(s, label)
        or _parse_city_state(s, label)
        or StreetAddressStop(label=label, text=s)
    )


def classify_stops(raws: Iterable[Any]) -> List[ClassifiedStop]:
    return [classify_stop(raw, i) for i, raw in enumerate(raws)]


def is_highway_only(stops: List[ClassifiedStop]) -> bool:
    """True when every stop is a ZIP or a city/state, i.e. no street-level detail."""
    return all(isinstance(stop, (PostalCodeStop, CityStateStop)) for stop in stops)
