"""
Tests for the configuration loader.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from config_loader import Config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "mcp_server": {"server_name": "test-server"},
                "dataset": {"default_path": "data/channel.json"},
                "validation": {"max_selection_length": 50},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_get_values_and_defaults(config_file):
    config = Config(str(config_file))
    assert config.server_name == "test-server"
    assert config.max_selection_length == 50
    # Missing keys fall back to built-in defaults
    assert config.max_field_name_length == 100
    assert config.gateway_title == "YouTube Channel Tools Gateway"

    with pytest.raises(KeyError):
        config.get("dataset", "missing_key")
    with pytest.raises(KeyError):
        config.get("missing_section", "key")


def test_dataset_path_relative_to_config(config_file, monkeypatch):
    monkeypatch.delenv("CHANNEL_DATASET_PATH", raising=False)
    config = Config(str(config_file))
    assert config.dataset_path == config_file.parent / "data" / "channel.json"


def test_dataset_path_env_override(config_file, monkeypatch, tmp_path):
    override = tmp_path / "elsewhere.json"
    monkeypatch.setenv("CHANNEL_DATASET_PATH", str(override))
    config = Config(str(config_file))
    assert config.dataset_path == override


def test_set_save_and_reload(config_file):
    config = Config(str(config_file))
    config.set("validation", "max_prompt_length", 500)
    config.save()

    fresh = Config(str(config_file))
    assert fresh.max_prompt_length == 500

    config_file.write_text(json.dumps({"mcp_server": {"server_name": "renamed"}}), encoding="utf-8")
    fresh.reload()
    assert fresh.server_name == "renamed"


def test_missing_and_invalid_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / "absent.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        Config(str(broken))


def test_explicit_none_default(config_file):
    config = Config(str(config_file))
    assert config.get("dataset", "missing_key", None) is None
    assert config.get("missing_section", "key", None) is None
    assert config.get("mcp_server", "server_name", None) == "test-server"
