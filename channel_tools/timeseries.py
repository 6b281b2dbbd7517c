"""Metric-over-time chart data for channel videos."""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .errors import NoDataError
from .fields import available_fields, parse_number

TITLE_LIMIT = 40

# Epoch numbers above this are taken to be milliseconds
_EPOCH_MS_THRESHOLD = 10**11

# Fractional seconds of any length, and offsets written without a colon (+0000)
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or an epoch number into an aware datetime (UTC if naive)."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) > _EPOCH_MS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    if "T" in text or " " in text:
        text = _FRACTION.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '00000')[:6]}", text, count=1)
        text = _COMPACT_OFFSET.sub(r"\1:\2", text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_date_label(moment: datetime) -> str:
    """US short date label, e.g. 1/2/2024."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def metric_vs_time(videos: List[Dict[str, Any]], metric: str, time_field: str) -> Dict[str, Any]:
    """
    Build one chart point per video that has a numeric metric and a parseable time.

    Points are sorted ascending by timestamp; videos sharing a timestamp keep dataset order.

    Raises:
        NoDataError: If the metric has no numeric values, the time field has no values,
            or no single video carries both
    """
    no_data = NoDataError(
        f'No data for metric "{metric}" or time field "{time_field}". '
        f'Available: {", ".join(available_fields(videos))}'
    )

    has_metric = any(parse_number(video.get(metric)) is not None for video in videos)
    has_time = any(_is_present(video.get(time_field)) for video in videos)
    if not has_metric or not has_time:
        raise no_data

    points = []
    for video in videos:
        value = parse_number(video.get(metric))
        raw_time = video.get(time_field)
        if value is None or not _is_present(raw_time):
            continue
        moment = parse_timestamp(raw_time)
        if moment is None:
            continue
        points.append(
            (
                moment,
                {
                    "time": raw_time,
                    "date": format_date_label(moment),
                    "value": value,
                    "title": str(video.get("title") or "")[:TITLE_LIMIT],
                },
            )
        )

    if not points:
        raise no_data

    points.sort(key=lambda point: point[0])

    return {
        "_chartType": "metric_vs_time",
        "metricField": metric,
        "timeField": time_field,
        "data": [point for _, point in points],
    }
