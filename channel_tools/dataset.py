"""Loading channel dataset files produced by the channel downloader."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from .errors import DatasetError
from .fields import available_fields
from .schemas import ChannelDataset
from .timeseries import parse_timestamp


def parse_channel_payload(payload: Any) -> ChannelDataset:
    """
    Build a ChannelDataset from a decoded JSON document.

    Accepts either the channel document ({"channel_title": ..., "videos": [...]})
    or a bare list of video records. Entries that are not objects are dropped.
    """
    if isinstance(payload, list):
        payload = {"videos": payload}
    if not isinstance(payload, dict):
        raise DatasetError("Channel dataset must be a JSON object or a list of videos")

    data = dict(payload)
    videos = data.get("videos") or []
    if not isinstance(videos, list):
        raise DatasetError("Channel dataset 'videos' must be a list")
    data["videos"] = [video for video in videos if isinstance(video, dict)]
    if data.get("video_count") is None:
        data["video_count"] = len(data["videos"])

    try:
        return ChannelDataset.model_validate(data)
    except ValidationError as e:
        raise DatasetError(f"Invalid channel dataset: {e}")


def load_channel_dataset(path: Union[str, Path]) -> ChannelDataset:
    """Read a channel dataset JSON file."""
    dataset_path = Path(path)
    try:
        with open(dataset_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        raise DatasetError(f"Dataset file not found at {dataset_path}")
    except json.JSONDecodeError as e:
        raise DatasetError(f"Invalid JSON in dataset file {dataset_path}: {e}")

    return parse_channel_payload(payload)


def summarize_dataset(dataset: ChannelDataset) -> Dict[str, Any]:
    """Channel metadata, field names and publish date range, for agent guidance."""
    published = [parse_timestamp(video.get("published_at")) for video in dataset.videos]
    published = [moment for moment in published if moment is not None]

    return {
        "channel_id": dataset.channel_id,
        "channel_title": dataset.channel_title,
        "channel_url": dataset.channel_url,
        "fetched_at": dataset.fetched_at,
        "video_count": len(dataset.videos),
        "fields": available_fields(dataset.videos),
        "published_range": {
            "earliest": min(published).isoformat() if published else None,
            "latest": max(published).isoformat() if published else None,
        },
    }
