"""
Tests for the statistics engine.
"""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from channel_tools.errors import NoDataError
from channel_tools.stats import compute_stats


def _videos(values, field="view_count"):
    return [{"title": f"v{i}", field: value} for i, value in enumerate(values)]


def test_two_values():
    stats = compute_stats(_videos([10, 50]), "view_count")
    assert stats == {"field": "view_count", "count": 2, "mean": 30, "median": 30, "std": 20, "min": 10, "max": 50}


def test_odd_count_median_and_population_std():
    stats = compute_stats(_videos([2, 4, 4, 4, 5, 5, 7, 9]), "view_count")
    assert stats["count"] == 8
    assert stats["mean"] == 5
    assert stats["median"] == 4.5
    # Population std of this classic sample is exactly 2 (sample std would be ~2.138)
    assert stats["std"] == 2

    stats = compute_stats(_videos([9, 1, 5]), "view_count")
    assert stats["median"] == 5


def test_rounds_derived_values_to_four_decimals():
    stats = compute_stats(_videos([1, 2, 2]), "view_count")
    assert stats["mean"] == 1.6667
    assert stats["std"] == 0.4714
    assert stats["min"] == 1
    assert stats["max"] == 2


def test_min_and_max_are_exact():
    stats = compute_stats(_videos([0.123456, 0.987654]), "view_count")
    assert stats["min"] == 0.123456
    assert stats["max"] == 0.987654


def test_ignores_non_numeric_values():
    videos = _videos([10, "n/a", None, "30"])
    stats = compute_stats(videos, "view_count")
    assert stats["count"] == 2
    assert stats["mean"] == 20


def test_single_value():
    stats = compute_stats(_videos([7]), "view_count")
    assert stats["std"] == 0
    assert stats["min"] == stats["median"] == stats["mean"] == stats["max"] == 7


@pytest.mark.parametrize(
    "values",
    [[3, 1, 2], [100, 100, 100], [5, -5, 12.5, 0, 8], [1e6, 2, 3e5, 44, 9000, 17]],
)
def test_summary_ordering_properties(values):
    stats = compute_stats(_videos(values), "view_count")
    assert stats["std"] >= 0
    assert stats["min"] <= stats["median"] <= stats["max"]
    assert stats["min"] <= stats["mean"] <= stats["max"]

    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    assert stats["std"] == pytest.approx(math.sqrt(variance), abs=1e-4)


def test_no_numeric_values_raises_no_data():
    videos = [{"title": "A", "view_count": 10, "published_at": "2024-01-02"}]
    with pytest.raises(NoDataError) as excinfo:
        compute_stats(videos, "nonexistent")
    assert excinfo.value.message == 'No numeric values for field "nonexistent". Available: title, view_count, published_at'


def test_empty_dataset_raises_no_data():
    with pytest.raises(NoDataError):
        compute_stats([], "view_count")
