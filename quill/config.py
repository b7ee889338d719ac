"""Quill Configuration — project-level .quillrc.yml support.

Loads configuration from .quillrc.yml (or .quillrc.yaml, .quillrc.json)
in the project root, searching upward from the working directory.

Example .quillrc.yml:
    target: text        # "text" or "llvm"
    quote: "'"          # quote character for generated strings
    output: build/out.txt
    log_level: info
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from quill.compiler import TARGETS
from quill.errors import ConfigError
from quill.lexer import QUOTES

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class QuillConfig:
    """Project-level Quill configuration."""
    target: str = "text"
    quote: str = '"'
    # Default output path; empty means stdout
    output: str = ""
    log_level: str = "warning"


_CONFIG_FILES = [
    ".quillrc.yml",
    ".quillrc.yaml",
    ".quillrc.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> QuillConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return QuillConfig()

    logger.debug("loading config from %s", path)
    with open(path, "r") as f:
        content = f.read()

    try:
        if path.endswith(".json"):
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"{path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> QuillConfig:
    """Convert a parsed dict to QuillConfig."""
    config = QuillConfig()

    if "target" in data:
        config.target = str(data["target"])
        if config.target not in TARGETS:
            raise ConfigError(f"target must be one of {TARGETS}, got {config.target!r}")
    if "quote" in data:
        config.quote = str(data["quote"])
        if config.quote not in QUOTES:
            raise ConfigError(f"quote must be ' or \", got {config.quote!r}")
    if "output" in data and data["output"] is not None:
        config.output = str(data["output"])
    if "log_level" in data:
        config.log_level = str(data["log_level"]).lower()
        if config.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {LOG_LEVELS}, got {config.log_level!r}")

    return config
