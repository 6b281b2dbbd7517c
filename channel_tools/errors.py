"""Error types raised inside the tool layer.

None of these escape ``execute_tool``: the dispatcher turns them into
``{"error": ...}`` payloads that can be shown to the user or fed back to the agent.
"""


class ToolError(Exception):
    """Base class for recoverable tool failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.message}


class NoDataError(ToolError):
    """A resolved field has no usable numeric or temporal values."""


class NoMatchError(ToolError):
    """The selection resolver found no candidate video."""


class UnknownToolError(ToolError):
    """The dispatcher received a name outside the tool registry."""


class InvalidArgumentsError(ToolError):
    """Tool arguments are missing a required field or have the wrong type."""


class DatasetError(ValueError):
    """A channel dataset file could not be read or parsed."""
