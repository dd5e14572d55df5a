"""
Configuration for fsutils diagnostics.

Settings come from built-in defaults, then an optional YAML file named by
FSUTILS_CONFIG, then environment variables. The process-wide logger is
built from them once, on first use.
"""

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .logger import ConsoleSink, DiagnosticLogger, JsonlSink, Level


ENV_LEVEL = "FSUTILS_LOG"
ENV_LOG_FILE = "FSUTILS_LOG_FILE"
ENV_CONFIG = "FSUTILS_CONFIG"


@dataclass
class Settings:
    """Resolved diagnostic settings."""
    level: Optional[Level] = None
    log_file: Optional[str] = None


def _default_config() -> Dict[str, Any]:
    """Return default configuration."""
    return {
        "logging": {
            "level": "off",
            "file": None,
        }
    }


def _load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML file, falling back to defaults."""
    config = _default_config()
    if not config_path:
        return config

    path = Path(config_path)
    if not path.is_file():
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return config

    if not isinstance(loaded, dict):
        return config
    loaded = loaded.get("fsutils", loaded)
    logging_section = loaded.get("logging") if isinstance(loaded, dict) else None
    if isinstance(logging_section, dict):
        config["logging"].update(logging_section)
    return config


def _parse_level(value: Any) -> Optional[Level]:
    # unknown names disable output
    try:
        return Level.parse(value)
    except ValueError:
        return None


def load_settings(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Resolve settings from defaults, YAML file, and environment.

    Args:
        config_path: YAML file to read; defaults to $FSUTILS_CONFIG
        environ: Environment mapping; defaults to os.environ

    Returns:
        Settings with the environment taking precedence
    """
    env = os.environ if environ is None else environ
    config = _load_config(config_path or env.get(ENV_CONFIG))
    logging_section = config["logging"]

    level = _parse_level(logging_section.get("level"))
    log_file = logging_section.get("file")

    if ENV_LEVEL in env:
        level = _parse_level(env[ENV_LEVEL])
    if env.get(ENV_LOG_FILE):
        log_file = env[ENV_LOG_FILE]

    return Settings(level=level, log_file=str(log_file) if log_file else None)


def build_logger(settings: Settings) -> DiagnosticLogger:
    """
    Create a logger for the given settings.

    A log file whose directory cannot be created disables diagnostics.
    """
    if settings.level is None:
        return DiagnosticLogger.disabled()
    if settings.log_file:
        try:
            sink = JsonlSink(settings.log_file)
        except OSError:
            return DiagnosticLogger.disabled()
        return DiagnosticLogger(settings.level, sink)
    return DiagnosticLogger(settings.level, ConsoleSink())


_default_logger: Optional[DiagnosticLogger] = None
_init_lock = threading.Lock()


def init_logging(logger: Optional[DiagnosticLogger] = None) -> DiagnosticLogger:
    """
    Install the process-wide diagnostic logger.

    Only the first call has an effect; later calls return the logger that
    is already installed and ignore their argument.

    Args:
        logger: Logger to install; built from load_settings() if omitted

    Returns:
        The installed logger
    """
    global _default_logger
    with _init_lock:
        if _default_logger is None:
            _default_logger = logger if logger is not None else build_logger(load_settings())
        return _default_logger


def get_logger() -> DiagnosticLogger:
    """Return the process-wide logger, initializing it on first use."""
    current = _default_logger
    if current is not None:
        return current
    return init_logging()
