"""
Tests for the JSON-RPC tool gateway.
"""

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent))

from channel_tools import main as gateway

VIDEOS = [
    {"title": "A", "view_count": 10, "published_at": "2024-01-02"},
    {"title": "B", "view_count": 50, "published_at": "2024-01-01"},
]


@pytest.fixture
def client():
    return TestClient(gateway.app)


def _call(client, name, arguments, videos=VIDEOS, call_id=1):
    params = {"name": name, "arguments": arguments}
    if videos is not None:
        params["videos"] = videos
    response = client.post("/", json={"jsonrpc": "2.0", "id": call_id, "method": "tools/call", "params": params})
    assert response.status_code == 200
    return response.json()


def _payload(body):
    return json.loads(body["result"]["content"][0]["text"])


def test_tools_list(client):
    response = client.post("/", json={"jsonrpc": "2.0", "id": 7, "method": "tools/list"})
    body = response.json()
    assert body["id"] == 7
    assert [tool["name"] for tool in body["result"]["tools"]] == [
        "generateImage",
        "plot_metric_vs_time",
        "play_video",
        "compute_stats_json",
    ]


def test_tools_call_success(client):
    body = _call(client, "compute_stats_json", {"field": "View Count"})
    assert "isError" not in body["result"]
    assert _payload(body)["mean"] == 30


def test_tools_call_error_payload(client):
    body = _call(client, "play_video", {"selection": "5"})
    assert body["result"]["isError"] is True
    assert _payload(body)["error"].startswith('No video matched "5".')


def test_unknown_tool(client):
    body = _call(client, "delete_channel", {})
    assert body["result"]["isError"] is True
    assert _payload(body) == {"error": "Unknown tool: delete_channel"}


def test_falls_back_to_configured_dataset(client, monkeypatch):
    monkeypatch.setattr(gateway, "_configured_videos", lambda: VIDEOS)
    body = _call(client, "play_video", {"selection": "most viewed"}, videos=None)
    assert _payload(body)["title"] == "B"


def test_no_dataset_available(client, monkeypatch):
    monkeypatch.setattr(gateway, "_configured_videos", lambda: None)
    body = _call(client, "compute_stats_json", {"field": "view_count"}, videos=None)
    assert body["result"]["isError"] is True
    assert "No channel dataset available" in _payload(body)["error"]


def test_missing_and_unsupported_methods(client):
    assert client.post("/", json={"jsonrpc": "2.0", "id": 1}).status_code == 400
    assert client.post("/", json={"jsonrpc": "2.0", "id": 1, "method": "resources/list"}).status_code == 400
