"""Tool definitions and dispatcher functions."""

from typing import List, Dict, Any, Optional, Tuple

from pydantic import ValidationError

from .errors import InvalidArgumentsError, ToolError, UnknownToolError
from .fields import resolve_field
from .schemas import ComputeStatsArgs, GenerateImageArgs, PlayVideoArgs, PlotMetricArgs, ToolName
from .selection import select_video
from .stats import compute_stats
from .timeseries import metric_vs_time

FIELD_NOTE = (
    "Use the exact field name from the channel JSON "
    "(e.g. view_count, like_count, comment_count, duration_seconds, published_at)."
)

Video = Dict[str, Any]


def _parse_args(model, tool: ToolName, arguments: Dict[str, Any]):
    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidArgumentsError(f"Invalid arguments for {tool.value}: {details}")


def _generate_image(arguments: Dict[str, Any], videos: List[Video]) -> Dict[str, Any]:
    # Marker only: the caller performs the image generation request
    args = _parse_args(GenerateImageArgs, ToolName.GENERATE_IMAGE, arguments)
    return {
        "_tool": ToolName.GENERATE_IMAGE.value,
        "prompt": args.prompt,
        "anchorImageBase64": args.anchorImageBase64 or None,
        "anchorMimeType": args.anchorMimeType or None,
        "_callApi": True,
    }


def _plot_metric_vs_time(arguments: Dict[str, Any], videos: List[Video]) -> Dict[str, Any]:
    args = _parse_args(PlotMetricArgs, ToolName.PLOT_METRIC_VS_TIME, arguments)
    metric = resolve_field(videos, args.metric or "view_count")
    time_field = resolve_field(videos, args.timeField or "published_at")
    return metric_vs_time(videos, metric, time_field)


def _play_video(arguments: Dict[str, Any], videos: List[Video]) -> Dict[str, Any]:
    args = _parse_args(PlayVideoArgs, ToolName.PLAY_VIDEO, arguments)
    chosen = select_video(videos, args.selection)
    return {
        "_chartType": "play_video",
        "title": chosen.get("title"),
        "thumbnail_url": chosen.get("thumbnail_url"),
        "video_url": chosen.get("video_url"),
        "video_id": chosen.get("video_id"),
    }


def _compute_stats_json(arguments: Dict[str, Any], videos: List[Video]) -> Dict[str, Any]:
    args = _parse_args(ComputeStatsArgs, ToolName.COMPUTE_STATS_JSON, arguments)
    return compute_stats(videos, resolve_field(videos, args.field))


TOOLS: List[Dict[str, Any]] = [
    {
        "name": ToolName.GENERATE_IMAGE.value,
        "description": "Generate an image from a text prompt and an optional anchor/reference image the user provided. Use when the user asks to create, generate, or modify an image based on a description and/or a reference image they attached. Parameters: prompt (required), and optionally anchorImageBase64 and anchorMimeType if the user attached an image.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "prompt": {"type": "string", "description": "Text description of the image to generate."},
                "anchorImageBase64": {
                    "type": "string",
                    "description": "Optional base64 of the reference image (if user attached one).",
                },
                "anchorMimeType": {
                    "type": "string",
                    "description": "Optional MIME type of the reference image, e.g. image/png.",
                },
            },
            "required": ["prompt"],
        },
    },
    {
        "name": ToolName.PLOT_METRIC_VS_TIME.value,
        "description": 'Plot any numeric field (views, likes, comments, duration, etc.) vs time for the channel videos. Use when the user asks for a chart, graph, or trend over time (e.g. "plot views over time", "graph likes by date").',
        "inputSchema": {
            "type": "object",
            "properties": {
                "metric": {"type": "string", "description": "Numeric field to plot on the y-axis. " + FIELD_NOTE},
                "timeField": {
                    "type": "string",
                    "description": "Time/date field for x-axis, usually published_at. Default: published_at",
                },
            },
            "required": ["metric"],
        },
    },
    {
        "name": ToolName.PLAY_VIDEO.value,
        "description": 'Play or open a YouTube video from the loaded channel data. Use when the user asks to "play", "open", or "watch" a video. The user can specify which video by title (e.g. "play the asbestos video"), ordinal (e.g. "play the first video", "play the 3rd video"), or "most viewed".',
        "inputSchema": {
            "type": "object",
            "properties": {
                "selection": {
                    "type": "string",
                    "description": 'Either a title fragment (e.g. "asbestos"), an ordinal ("first", "1", "third", "3", "4th"), or "most viewed".',
                },
            },
            "required": ["selection"],
        },
    },
    {
        "name": ToolName.COMPUTE_STATS_JSON.value,
        "description": "Compute mean, median, std (standard deviation), min, and max for any numeric field in the channel JSON (e.g. view_count, like_count, comment_count, duration_seconds). Use when the user asks for statistics, average, distribution, or summary of a numeric column.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "field": {"type": "string", "description": "Exact field name from the channel videos. " + FIELD_NOTE},
            },
            "required": ["field"],
        },
    },
]

# Mapping tool name -> callable
TOOL_MAP = {
    ToolName.GENERATE_IMAGE: _generate_image,
    ToolName.PLOT_METRIC_VS_TIME: _plot_metric_vs_time,
    ToolName.PLAY_VIDEO: _play_video,
    ToolName.COMPUTE_STATS_JSON: _compute_stats_json,
}


def handle_tool_call(
    name: str, arguments: Optional[Dict[str, Any]], videos: Optional[List[Video]]
) -> Tuple[Dict[str, Any], bool]:
    """
    Run a tool and report whether the result is an error payload.

    Returns:
        (result, is_error) where an error result is {"error": message}
    """
    if not isinstance(videos, list):
        videos = []
    videos = [video for video in videos if isinstance(video, dict)]
    if arguments is None:
        arguments = {}

    try:
        try:
            tool = ToolName(name)
        except ValueError:
            raise UnknownToolError(f"Unknown tool: {name}")
        if not isinstance(arguments, dict):
            raise InvalidArgumentsError(f"Invalid arguments for {tool.value}: arguments must be an object")
        return TOOL_MAP[tool](arguments, videos), False
    except ToolError as e:
        return e.to_payload(), True


def execute_tool(name: str, arguments: Optional[Dict[str, Any]], videos: Optional[List[Video]]) -> Dict[str, Any]:
    """
    Route a tool call to its handler against the caller-supplied videos.

    Never raises for bad input: failures come back as {"error": message}.
    """
    result, _ = handle_tool_call(name, arguments, videos)
    return result
