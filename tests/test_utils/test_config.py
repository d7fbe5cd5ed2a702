"""Tests for configuration system."""

import os
import tempfile

import pytest
import yaml

from monoview.errors import ConfigurationError
from monoview.utils.config import (
    MonoviewConfig, load_config, FrameConfig, DisplayConfig, _apply_overrides
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("MONOVIEW_WIDTH", "MONOVIEW_HEIGHT",
                "MONOVIEW_DISPLAY_BACKEND", "MONOVIEW_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def write_yaml(data):
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(data, f)
        return f.name


def test_default_config():
    """Defaults: 1000x400 frames in a "PtGrey Live Feed" window."""
    config = MonoviewConfig()

    assert config.frame.width == 1000
    assert config.frame.height == 400
    assert config.display.window_title == "PtGrey Live Feed"
    assert config.display.wait_ms == 1
    assert config.display.quit_keys == []
    assert config.rate.window_seconds == 1.0
    assert config.loop.max_frames is None


def test_load_repo_default_file():
    config = load_config(configure_logging=False)
    assert config.frame.width == 1000
    assert config.display.backend == "opencv"


def test_load_config_from_yaml():
    """Test loading config from YAML file."""
    temp_path = write_yaml({
        "frame": {"width": 640, "height": 480},
        "display": {"backend": "headless", "quit_keys": ["q"]},
    })

    try:
        config = load_config(temp_path, configure_logging=False)
        assert config.frame.width == 640
        assert config.frame.height == 480
        assert config.display.backend == "headless"
        assert config.display.quit_keys == ["q"]
    finally:
        os.unlink(temp_path)


def test_config_overrides():
    """Test applying overrides to config."""
    config_dict = {"frame": {"width": 10}}
    overrides = {"frame.width": 20, "loop.max_frames": 5}

    result = _apply_overrides(config_dict, overrides)

    assert result["frame"]["width"] == 20
    assert result["loop"]["max_frames"] == 5


def test_load_config_with_overrides():
    config = load_config(
        overrides={"frame.height": 100, "source.seed": 3},
        configure_logging=False,
    )
    assert config.frame.height == 100
    assert config.source.seed == 3


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MONOVIEW_WIDTH", "320")
    monkeypatch.setenv("MONOVIEW_DISPLAY_BACKEND", "headless")

    config = load_config(configure_logging=False)

    assert config.frame.width == 320
    assert config.display.backend == "headless"


def test_explicit_overrides_beat_env(monkeypatch):
    monkeypatch.setenv("MONOVIEW_WIDTH", "320")
    config = load_config(overrides={"frame.width": 64}, configure_logging=False)
    assert config.frame.width == 64


@pytest.mark.parametrize("overrides", [
    {"frame.width": 0},
    {"frame.height": -4},
    {"display.wait_ms": 0},
    {"display.backend": "vnc"},
    {"display.quit_keys": ["esc"]},
    {"rate.window_seconds": 0},
    {"loop.max_frames": 0},
    {"logging.level": "LOUD"},
])
def test_invalid_values_fail_fast(overrides):
    with pytest.raises(ConfigurationError):
        load_config(overrides=overrides, configure_logging=False)


def test_missing_file():
    with pytest.raises(ConfigurationError):
        load_config("/nonexistent/monoview.yaml", configure_logging=False)


def test_non_mapping_file():
    temp_path = write_yaml([1, 2, 3])
    try:
        with pytest.raises(ConfigurationError):
            load_config(temp_path, configure_logging=False)
    finally:
        os.unlink(temp_path)


def test_nested_config_access():
    config = MonoviewConfig()
    assert isinstance(config.frame, FrameConfig)
    assert isinstance(config.display, DisplayConfig)


def test_setup_logging_file_handler(tmp_path):
    config = MonoviewConfig(logging={
        "level": "debug",
        "log_to_file": True,
        "log_directory": str(tmp_path / "logs"),
    })
    config.setup_logging()
    assert config.logging.level == "DEBUG"
    assert (tmp_path / "logs" / "monoview.log").exists()


def test_config_source_logged_after_logging_setup(monkeypatch):
    """The 'Loaded config from' line goes through the configured handlers."""
    from monoview.utils import config as config_module

    events = []

    class RecordingLogger:
        def info(self, msg, *args):
            events.append(("info", msg % args))

        def debug(self, msg, *args):
            events.append(("debug", msg % args))

        def warning(self, msg, *args):
            events.append(("warning", msg % args))

    monkeypatch.setattr(config_module, "logger", RecordingLogger())
    monkeypatch.setattr(
        MonoviewConfig, "setup_logging", lambda self: events.append(("setup", ""))
    )
    temp_path = write_yaml({"frame": {"width": 64}})

    try:
        load_config(temp_path)
    finally:
        os.unlink(temp_path)

    assert events[0] == ("setup", "")
    assert events[1] == ("info", f"Loaded config from {temp_path}")
