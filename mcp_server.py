#!/usr/bin/env python3
"""
MCP server exposing YouTube channel analytics tools using FastMCP.
"""

import sys
from pathlib import Path
from typing import Dict, Any, Optional

from fastmcp import FastMCP

from channel_tools.dataset import load_channel_dataset, summarize_dataset
from channel_tools.errors import DatasetError
from channel_tools.schemas import ChannelDataset, ToolName
from channel_tools.tools import handle_tool_call
from config_loader import get_config
from security_utils import (
    log_security_event,
    validate_dataset_path,
    validate_field_name,
    validate_prompt,
    validate_selection,
)


# ============================================================================
# Dataset State
# ============================================================================


def load_startup_dataset(path: Optional[Path] = None) -> ChannelDataset:
    """Load the configured channel dataset, falling back to an empty one."""
    config = get_config()
    dataset_path = path or config.dataset_path
    try:
        dataset = load_channel_dataset(dataset_path)
        print(f"✓ Loaded {len(dataset.videos)} videos from {dataset_path}", file=sys.stderr)
        return dataset
    except DatasetError as e:
        print(f"⚠ WARNING: {e}", file=sys.stderr)
        print("Use the load_channel_dataset tool or set CHANNEL_DATASET_PATH", file=sys.stderr)
        return ChannelDataset()


def set_current_dataset(dataset: ChannelDataset) -> None:
    global CURRENT_DATASET
    CURRENT_DATASET = dataset


# ============================================================================
# Tool Execution
# ============================================================================


def _validate_arguments(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize the free-text arguments of a tool call before dispatching."""
    config = get_config()
    validated = dict(arguments)

    if name == ToolName.GENERATE_IMAGE.value and validated.get("prompt") is not None:
        validated["prompt"] = validate_prompt(validated["prompt"], max_length=config.max_prompt_length)
    elif name == ToolName.PLAY_VIDEO.value and validated.get("selection") is not None:
        validated["selection"] = validate_selection(validated["selection"], max_length=config.max_selection_length)
    elif name == ToolName.COMPUTE_STATS_JSON.value and validated.get("field") is not None:
        validated["field"] = validate_field_name(validated["field"], max_length=config.max_field_name_length)
    elif name == ToolName.PLOT_METRIC_VS_TIME.value:
        for key in ("metric", "timeField"):
            if validated.get(key):
                validated[key] = validate_field_name(validated[key], max_length=config.max_field_name_length)

    return validated


async def call_channel_tool(name: str, arguments: Dict[str, Any]) -> dict:
    """
    Run one of the channel tools against the currently loaded videos.

    All failures are returned as {"error": message} so the agent can relay them.
    """
    try:
        arguments = _validate_arguments(name, {k: v for k, v in arguments.items() if v is not None})
    except ValueError as e:
        log_security_event("invalid_tool_arguments", {"tool": name, "reason": str(e)}, severity="WARNING")
        return {"error": f"Invalid input: {str(e)}"}

    try:
        result, is_error = handle_tool_call(name, arguments, CURRENT_DATASET.videos)
    except Exception as e:
        log_security_event("tool_failure", {"tool": name, "reason": str(e)}, severity="ERROR")
        return {"error": f"Error running {name}: {str(e)}"}

    if is_error:
        log_security_event("tool_error", {"tool": name, "error": result.get("error")}, severity="WARNING")
    return result


async def load_dataset_from_path(path: str) -> dict:
    """Replace the loaded dataset with the channel file at ``path``."""
    try:
        dataset_path = validate_dataset_path(path)
        dataset = load_channel_dataset(dataset_path)
    except ValueError as e:
        # DatasetError is a ValueError too
        log_security_event("dataset_load_failed", {"path": path, "reason": str(e)}, severity="WARNING")
        return {"error": f"Error loading dataset: {str(e)}"}

    set_current_dataset(dataset)
    return {"status": "success", "path": str(dataset_path), **summarize_dataset(dataset)}


# ============================================================================
# Server Initialization
# ============================================================================

config = get_config()
CURRENT_DATASET = load_startup_dataset()

# Create the FastMCP server instance
mcp = FastMCP(config.server_name)

print("Creating MCP server...", file=sys.stderr)


# ============================================================================
# MCP Resources
# ============================================================================


@mcp.resource("channel://dataset")
async def get_channel_dataset() -> dict:
    """Expose the loaded channel dataset (summary plus videos) as an MCP resource."""
    try:
        return {**summarize_dataset(CURRENT_DATASET), "videos": CURRENT_DATASET.videos}
    except Exception as e:
        return {"error": f"Error accessing dataset: {str(e)}"}


# ============================================================================
# MCP Tools
# ============================================================================


@mcp.tool(name="generateImage")
async def generate_image(
    prompt: str, anchorImageBase64: Optional[str] = None, anchorMimeType: Optional[str] = None
) -> dict:
    """
    Generate an image from a text prompt and an optional anchor/reference image.

    Returns a request marker ({"_tool": "generateImage", "_callApi": true, ...}); the client
    performs the image generation call with the prompt and reference image.

    Args:
        prompt: Text description of the image to generate
        anchorImageBase64: Optional base64 of the reference image the user attached
        anchorMimeType: Optional MIME type of the reference image, e.g. image/png
    """
    return await call_channel_tool(
        ToolName.GENERATE_IMAGE.value,
        {"prompt": prompt, "anchorImageBase64": anchorImageBase64, "anchorMimeType": anchorMimeType},
    )


@mcp.tool()
async def plot_metric_vs_time(metric: str = "view_count", timeField: str = "published_at") -> dict:
    """
    Plot any numeric field (views, likes, comments, duration, etc.) vs time for the channel videos.

    Use when the user asks for a chart, graph, or trend over time.

    Args:
        metric: Numeric field for the y-axis (e.g. view_count, like_count, comment_count)
        timeField: Time/date field for the x-axis (default: published_at)
    """
    return await call_channel_tool(ToolName.PLOT_METRIC_VS_TIME.value, {"metric": metric, "timeField": timeField})


@mcp.tool()
async def play_video(selection: str) -> dict:
    """
    Play or open a video from the loaded channel data.

    Args:
        selection: A title fragment ("asbestos"), an ordinal ("first", "3", "4th"), or "most viewed"
    """
    return await call_channel_tool(ToolName.PLAY_VIDEO.value, {"selection": selection})


@mcp.tool()
async def compute_stats_json(field: str) -> dict:
    """
    Compute mean, median, std (population), min, and max for a numeric field of the channel videos.

    Args:
        field: Field name such as view_count, like_count, comment_count, duration_seconds
    """
    return await call_channel_tool(ToolName.COMPUTE_STATS_JSON.value, {"field": field})


@mcp.tool(name="load_channel_dataset")
async def load_channel_dataset_file(path: str) -> dict:
    """
    Load a channel dataset JSON file (channel document or bare list of videos).

    Args:
        path: Path to the .json file produced by the channel downloader
    """
    return await load_dataset_from_path(path)


@mcp.tool()
async def get_dataset_summary() -> dict:
    """Get channel metadata, available fields, and publish date range of the loaded dataset."""
    try:
        return summarize_dataset(CURRENT_DATASET)
    except Exception as e:
        return {"error": f"Failed to summarize dataset: {str(e)}"}


@mcp.tool()
async def update_config(section: str, key: str, value: Any) -> dict:
    """
    Update a configuration value and save to file.

    Args:
        section: Configuration section (e.g., 'dataset', 'validation')
        key: Configuration key to update
        value: New value to set
    """
    try:
        config = get_config()
        old_value = config.get_section(section).get(key)

        config.set(section, key, value)
        config.save()

        return {
            "status": "success",
            "section": section,
            "key": key,
            "old_value": old_value,
            "new_value": value,
            "message": f"Updated {section}.{key} from {old_value} to {value}",
        }
    except Exception as e:
        return {"error": f"Failed to update config: {str(e)}"}


@mcp.tool()
async def get_current_config() -> dict:
    """Get the current configuration settings."""
    try:
        config = get_config()
        return {
            "mcp_server": config.get_section("mcp_server"),
            "dataset": config.get_section("dataset"),
            "validation": config.get_section("validation"),
            "gateway": config.get_section("gateway"),
            "config_file_path": str(config.config_path),
        }
    except Exception as e:
        return {"error": f"Failed to get config: {str(e)}"}


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    print("Starting channel tools MCP server...", file=sys.stderr)

    if CURRENT_DATASET.videos:
        title = CURRENT_DATASET.channel_title or "unknown channel"
        print(f"✓ Serving {len(CURRENT_DATASET.videos)} videos from {title}", file=sys.stderr)
    else:
        print("⚠ WARNING: No channel dataset loaded", file=sys.stderr)

    print("Starting stdio transport...", file=sys.stderr)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc(file=sys.stderr)
