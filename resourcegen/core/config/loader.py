"""
Configuration loader — reads codegen.yml into ``CodegenConfig``.

The file is optional.  When it exists, the directory holding it is the
project root and every generated path is relative to it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from resourcegen.core.errors import CodegenError
from resourcegen.core.models.config import CodegenConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "codegen.yml"


class ConfigError(CodegenError):
    """Raised when codegen.yml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for codegen.yml starting from *start_dir* (default: cwd), walking up.

    Returns:
        Path to codegen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> CodegenConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to codegen.yml.  None means "use defaults".

    Raises:
        ConfigError: If an explicit file is missing or invalid.
    """
    if path is None:
        logger.debug("No %s — using defaults", CONFIG_FILE)
        return CodegenConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return CodegenConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything to sit under a top-level "codegen" key
    if "codegen" in data and isinstance(data["codegen"], dict):
        data = data["codegen"]

    try:
        config = CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info("Loaded generator config from %s (schemas: %s)", path, config.schemas_dir)
    return config


def project_root(config_path: Path | None) -> Path:
    """Project root for a config file path; cwd when there is no file."""
    return config_path.parent.resolve() if config_path else Path.cwd().resolve()
