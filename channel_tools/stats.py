"""Descriptive statistics over one numeric field of a video dataset."""

from typing import Any, Dict, List

import numpy as np

from .errors import NoDataError
from .fields import available_fields, numeric_values

PRECISION = 4


def compute_stats(videos: List[Dict[str, Any]], field: str) -> Dict[str, Any]:
    """
    Summarize a numeric field: count, mean, median, population std, min and max.

    Args:
        videos: Video records in dataset order
        field: Field name, already resolved against the dataset keys

    Returns:
        Dict with mean, median and std rounded to 4 decimals; min and max reported exactly

    Raises:
        NoDataError: If no record has a numeric value for the field
    """
    values = numeric_values(videos, field)
    if not values:
        raise NoDataError(
            f'No numeric values for field "{field}". Available: {", ".join(available_fields(videos))}'
        )

    sample = np.asarray(values, dtype=float)

    return {
        "field": field,
        "count": len(values),
        "mean": round(float(np.mean(sample)), PRECISION),
        "median": round(float(np.median(sample)), PRECISION),
        # ddof=0 divides by count
        "std": round(float(np.std(sample, ddof=0)), PRECISION),
        "min": min(values),
        "max": max(values),
    }
