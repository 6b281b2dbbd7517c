from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Any


class ToolName(str, Enum):
    """Tools the agent may call."""

    GENERATE_IMAGE = "generateImage"
    PLOT_METRIC_VS_TIME = "plot_metric_vs_time"
    PLAY_VIDEO = "play_video"
    COMPUTE_STATS_JSON = "compute_stats_json"


class GenerateImageArgs(BaseModel):
    """Input schema for generateImage."""

    prompt: str = Field(..., description="Text description of the image to generate.")
    anchorImageBase64: Optional[str] = Field(None, description="Base64 of the reference image, if attached.")
    anchorMimeType: Optional[str] = Field(None, description="MIME type of the reference image, e.g. image/png.")

    model_config = ConfigDict(extra="ignore")


class PlotMetricArgs(BaseModel):
    """Input schema for plot_metric_vs_time."""

    metric: Optional[str] = Field("view_count", description="Numeric field for the y-axis")
    timeField: Optional[str] = Field("published_at", description="Time/date field for the x-axis")

    model_config = ConfigDict(extra="ignore")


class PlayVideoArgs(BaseModel):
    """Input schema for play_video."""

    selection: str = Field(..., description='Title fragment, ordinal ("first", "3"), or "most viewed"')

    model_config = ConfigDict(extra="ignore")


class ComputeStatsArgs(BaseModel):
    """Input schema for compute_stats_json."""

    field: str = Field(..., description="Numeric field name from the channel videos")

    model_config = ConfigDict(extra="ignore")


class ChannelDataset(BaseModel):
    """A downloaded channel: metadata plus its video records."""

    channel_id: Optional[str] = None
    channel_title: Optional[str] = None
    channel_url: Optional[str] = None
    fetched_at: Optional[str] = None
    video_count: int = 0
    videos: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")
