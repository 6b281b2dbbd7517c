"""Pick one video from a loose, agent-transcribed selection string."""

import re
from typing import Any, Dict, List, Optional

from .errors import NoMatchError
from .fields import parse_number, resolve_field

MOST_VIEWED_PHRASES = ("most viewed", "most viewed video")

ORDINAL_WORDS = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
}

_ORDINAL_NUMBER = re.compile(r"^(\d+)(?:st|nd|rd|th)?$")


def parse_ordinal(selection: str) -> Optional[int]:
    """
    Return the 1-based position named by an ordinal selection, or None.

    Accepts word forms ("first" .. "tenth"), suffixed forms ("1st", "22nd", "4th")
    and bare unsigned integers ("3", "12").
    """
    text = selection.strip().lower()
    if text in ORDINAL_WORDS:
        return ORDINAL_WORDS[text]

    match = _ORDINAL_NUMBER.match(text)
    if match:
        return int(match.group(1))
    return None


def _most_viewed(videos: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not videos:
        return None

    view_field = resolve_field(videos, "view_count")
    best = None
    best_views = None
    for video in videos:
        views = parse_number(video.get(view_field))
        if views is None:
            views = 0.0
        # Strict comparison keeps the earliest record on ties
        if best_views is None or views > best_views:
            best, best_views = video, views
    return best


def _no_match(selection: str) -> NoMatchError:
    return NoMatchError(f'No video matched "{selection}". Try "first", "most viewed", or part of a title.')


def select_video(videos: List[Dict[str, Any]], selection: Optional[str]) -> Dict[str, Any]:
    """
    Resolve a selection to a single video record.

    Rules, in priority order:
        1. "most viewed": highest numeric view count, earliest record on ties
        2. Ordinal ("first", "3rd", "5"): position N maps to index N - 1
        3. Case-insensitive substring of the title, first match in dataset order

    An ordinal outside the dataset is a miss; it does not fall back to title matching.
    A blank selection is a substring of every title and picks the first video.

    Raises:
        NoMatchError: If no rule selects a record
    """
    raw = selection or ""
    text = raw.strip().lower()
    if not videos:
        raise _no_match(raw)

    if text in MOST_VIEWED_PHRASES:
        chosen = _most_viewed(videos)
        if chosen is None:
            raise _no_match(raw)
        return chosen

    position = parse_ordinal(text)
    if position is not None:
        if 1 <= position <= len(videos):
            return videos[position - 1]
        raise _no_match(raw)

    for video in videos:
        if text in str(video.get("title") or "").lower():
            return video

    raise _no_match(raw)
