"""Configuration management for monoview."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from monoview.errors import ConfigurationError


logger = logging.getLogger(__name__)


class FrameConfig(BaseModel):
    """Dimensions of every frame."""
    width: int = Field(default=1000, gt=0)
    height: int = Field(default=400, gt=0)


class SourceConfig(BaseModel):
    """Which frame source to run."""
    kind: Literal["noise"] = "noise"
    seed: Optional[int] = None  # None = OS entropy


class DisplayConfig(BaseModel):
    """Preview window configuration."""
    backend: Literal["opencv", "headless"] = "opencv"
    window_title: str = "PtGrey Live Feed"
    wait_ms: int = Field(default=1, ge=1)  # event pump per frame; 0 would block
    quit_keys: List[str] = Field(default_factory=list)

    @field_validator("quit_keys")
    @classmethod
    def validate_quit_keys(cls, v: List[str]) -> List[str]:
        for key in v:
            if len(key) != 1:
                raise ValueError(f"Quit keys must be single characters, got {key!r}")
        return v


class RateConfig(BaseModel):
    """Frames-per-second reporting."""
    window_seconds: float = Field(default=1.0, gt=0)


class LoopConfig(BaseModel):
    """Stream loop limits."""
    max_frames: Optional[int] = Field(default=None, ge=1)  # None = run until stopped


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = "INFO"
    log_to_file: bool = False
    log_directory: str = "logs"
    max_log_size_mb: int = 10
    backup_count: int = 3

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()


class MonoviewConfig(BaseModel):
    """Root configuration for monoview."""

    frame: FrameConfig = Field(default_factory=FrameConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    rate: RateConfig = Field(default_factory=RateConfig)
    loop: LoopConfig = Field(default_factory=LoopConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def setup_logging(self) -> None:
        """Configure logging based on config."""
        log_level = getattr(logging, self.logging.level.upper())

        handlers = []

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

        # File handler
        if self.logging.log_to_file:
            log_dir = Path(self.logging.log_directory)
            log_dir.mkdir(exist_ok=True, parents=True)

            file_handler = RotatingFileHandler(
                log_dir / "monoview.log",
                maxBytes=self.logging.max_log_size_mb * 1024 * 1024,
                backupCount=self.logging.backup_count
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logging.basicConfig(
            level=log_level,
            handlers=handlers,
            force=True
        )

        logger.info("Logging configured: level=%s", self.logging.level)


# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "MONOVIEW_WIDTH": "frame.width",
    "MONOVIEW_HEIGHT": "frame.height",
    "MONOVIEW_DISPLAY_BACKEND": "display.backend",
    "MONOVIEW_LOG_LEVEL": "logging.level",
}


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    configure_logging: bool = True,
) -> MonoviewConfig:
    """Load configuration from YAML file with optional overrides.

    Priority (highest to lowest): ``overrides``, ``MONOVIEW_*`` environment
    variables, the YAML file, defaults.

    Args:
        config_path: Path to YAML config file. If None, uses
            ``config/default.yaml`` at the repo root when present.
        overrides: Dictionary of config overrides (nested keys with dots)
        configure_logging: Call :meth:`MonoviewConfig.setup_logging`.

    Returns:
        Validated MonoviewConfig instance

    Raises:
        ConfigurationError: If the file is missing or the values are invalid.

    Example:
        >>> config = load_config("config/default.yaml")
        >>> config = load_config(overrides={"frame.width": 640})
    """
    config_dict: Dict[str, Any] = {}
    loaded_from: Optional[Path] = None
    if config_path is None:
        default_path = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"
        if default_path.exists():
            config_dict = _read_yaml(default_path)
            loaded_from = default_path
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        config_dict = _read_yaml(path)
        loaded_from = path

    env = {
        key: os.environ[var]
        for var, key in ENV_OVERRIDES.items()
        if os.environ.get(var)
    }
    if env:
        config_dict = _apply_overrides(config_dict, env)

    if overrides:
        config_dict = _apply_overrides(config_dict, overrides)

    try:
        config = MonoviewConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if configure_logging:
        config.setup_logging()

    if loaded_from is not None:
        logger.info("Loaded config from %s", loaded_from)
    else:
        logger.info("No config file found, using defaults")

    return config


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _apply_overrides(
    config_dict: Dict[str, Any],
    overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """Apply nested overrides to config dictionary.

    Example:
        overrides = {"display.backend": "headless"}
        -> config_dict["display"]["backend"] = "headless"
    """
    for key, value in overrides.items():
        keys = key.split(".")
        d = config_dict
        for k in keys[:-1]:
            d = d.setdefault(k, {})
        d[keys[-1]] = value
    return config_dict
