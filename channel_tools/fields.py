"""Field name resolution and numeric coercion over loosely-typed video records."""

import math
import re
from typing import Any, Dict, List, Optional

_SEPARATORS = re.compile(r"[\s_-]+")
# Leading number, the way a lenient float parse reads "42abc" as 42
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def normalize_field_name(name: str) -> str:
    """Lowercase a field name and drop whitespace, underscores and hyphens."""
    return _SEPARATORS.sub("", name.lower())


def available_fields(videos: List[Dict[str, Any]]) -> List[str]:
    """Keys of the first record, in order."""
    if not videos or not isinstance(videos[0], dict):
        return []
    return list(videos[0].keys())


def resolve_field(videos: List[Dict[str, Any]], name: Optional[str]) -> Optional[str]:
    """
    Map a loosely-specified field name to the actual key in the dataset.

    "View Count", "view-count" and "VIEW_COUNT" all resolve to "view_count" when the
    first record has that key. When nothing matches, the name is returned unchanged and
    callers find out downstream that the field has no values.
    """
    if not videos or not name:
        return name

    keys = available_fields(videos)
    if name in keys:
        return name

    target = normalize_field_name(name)
    for key in keys:
        if normalize_field_name(key) == target:
            return key
    return name


def parse_number(value: Any) -> Optional[float]:
    """Coerce a record value to a finite float, or None if it does not parse."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value.strip())
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def numeric_values(videos: List[Dict[str, Any]], field: Optional[str]) -> List[float]:
    """Numeric values of ``field`` in dataset order, skipping anything unparseable."""
    if not field:
        return []

    values = []
    for video in videos:
        number = parse_number(video.get(field))
        if number is not None:
            values.append(number)
    return values
