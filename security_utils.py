"""
Input validation for tool arguments arriving from the agent.
"""

import re
import sys
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def sanitize_string(value: str, max_length: int = 1000) -> str:
    """Strip control characters and surrounding whitespace, enforcing a length limit.

    Text is not HTML-escaped: selections are matched literally against video titles.
    """
    if not isinstance(value, str):
        raise ValueError("Value must be a string")

    if len(value) > max_length:
        raise ValueError(f"String too long. Maximum {max_length} characters allowed.")

    value = _CONTROL_CHARS.sub("", value)

    return value.strip()


def validate_field_name(field: str, max_length: int = 100) -> str:
    """Validate a field name such as 'view_count' or 'View Count'."""
    if not field:
        raise ValueError("Field name cannot be empty")

    field = sanitize_string(field, max_length=max_length)

    if not re.match(r"^[\w\s.-]+$", field):
        raise ValueError(
            "Field name contains invalid characters. Only letters, digits, spaces, dots, hyphens, and underscores allowed."
        )

    return field


def validate_selection(selection: str, max_length: int = 200) -> str:
    """Validate a play_video selection string. Blank is allowed and matches the first title."""
    return sanitize_string(selection, max_length=max_length)


def validate_prompt(prompt: str, max_length: int = 2000) -> str:
    """Validate an image generation prompt."""
    prompt = sanitize_string(prompt, max_length=max_length)

    if not prompt:
        raise ValueError("Prompt cannot be empty")

    return prompt


def validate_dataset_path(path: str) -> Path:
    """Validate a channel dataset path supplied by the agent."""
    if not path:
        raise ValueError("Dataset path cannot be empty")

    path = sanitize_string(path, max_length=500)

    if not path.lower().endswith(".json"):
        raise ValueError("Dataset path must point to a .json file")

    return Path(path)


def log_security_event(event_type: str, details: Dict[str, Any], severity: str = "INFO"):
    """Log validation and tool events as one JSON line on stderr."""
    log_entry = {
        "timestamp": datetime.now().isoformat(),
        "event_type": event_type,
        "severity": severity,
        "details": details,
    }

    print(f"SECURITY_EVENT: {json.dumps(log_entry, default=str)}", file=sys.stderr)
