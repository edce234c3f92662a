"""YAML configuration parser for crossbuild.

This module provides parsing and validation for crossbuild.yaml configuration
files. Every key is optional; an absent file yields the built-in defaults.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import yaml

from crossbuild.core.exceptions import ConfigError
from crossbuild.cross.pkgconfig import DEFAULT_HOST_PKG_CONFIG_PATH
from crossbuild.cross.sysroot import DEFAULT_SYSROOT_RELPATH
from crossbuild.cross.targets import DEFAULT_TARGET, parse_target_triple

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "crossbuild.yaml"


@dataclass
class CrossBuildConfig:
    """Complete crossbuild configuration."""

    target: str = DEFAULT_TARGET
    tool: str = "cargo"
    subcommand: str = "build"
    sysroot: str = DEFAULT_SYSROOT_RELPATH  # relative to $HOME unless absolute
    pkg_config_path: str = DEFAULT_HOST_PKG_CONFIG_PATH
    linker: Optional[str] = None  # exported as CARGO_TARGET_<TRIPLE>_LINKER
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)


_STRING_KEYS = (
    "target",
    "tool",
    "subcommand",
    "sysroot",
    "pkg_config_path",
    "linker",
)


def parse_config(config_path: Path) -> CrossBuildConfig:
    """
    Parse crossbuild.yaml configuration file.

    Args:
        config_path: Path to crossbuild.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If the file is missing or the configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}")

    if data is None:
        return CrossBuildConfig()

    return _parse_and_validate(data)


def _parse_and_validate(data: Any) -> CrossBuildConfig:
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    known = set(_STRING_KEYS) | {"args", "env"}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {}

    for key in _STRING_KEYS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str) or not value:
            raise ConfigError(f"'{key}' must be a non-empty string")
        values[key] = value

    if "target" in values:
        parse_target_triple(values["target"])

    if "args" in data:
        args = data["args"]
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise ConfigError("'args' must be a list of strings")
        values["args"] = list(args)

    if "env" in data:
        env = data["env"]
        if not isinstance(env, dict):
            raise ConfigError("'env' must be a mapping of variable names to values")
        # YAML turns `1` and `true` into int/bool; the environment wants strings.
        normalized = {}
        for name, value in env.items():
            if not isinstance(name, str) or isinstance(value, (dict, list)):
                raise ConfigError(f"Invalid environment entry: {name!r}")
            normalized[name] = _env_value(value)
        values["env"] = normalized

    return CrossBuildConfig(**values)


def _env_value(value: Any) -> str:
    """Render a YAML scalar the way it would be written in a shell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def find_config_file(
    project_root: Path, config_file: Optional[Path] = None
) -> Optional[Path]:
    """
    Locate the configuration file to use.

    Args:
        project_root: Project root directory
        config_file: Explicit configuration path, if given on the command line

    Returns:
        Path to the file, or None when no configuration is present
    """
    if config_file:
        return config_file

    default_config = project_root / CONFIG_FILENAME
    if default_config.exists():
        return default_config

    logger.debug(f"Config file not found (optional): {default_config}")
    return None


def load_config(
    project_root: Path, config_file: Optional[Path] = None
) -> CrossBuildConfig:
    """
    Load configuration for a project.

    An explicitly requested file must exist; the default file is optional.

    Raises:
        ConfigError: If the configuration cannot be loaded
    """
    path = find_config_file(project_root, config_file)
    if path is None:
        return CrossBuildConfig()
    return parse_config(path)


def merge_arguments(config: CrossBuildConfig, args) -> CrossBuildConfig:
    """
    Apply command-line overrides on top of a loaded configuration.

    Args:
        config: Configuration loaded from file (or defaults)
        args: Parsed command-line arguments

    Returns:
        New configuration with overrides applied
    """
    overrides: Dict[str, Any] = {}

    for key in ("target", "tool", "sysroot", "linker"):
        value = getattr(args, key, None)
        if value:
            overrides[key] = value

    if "target" in overrides:
        parse_target_triple(overrides["target"])

    tool_args = getattr(args, "tool_args", None)
    if tool_args:
        overrides["args"] = config.args + list(tool_args)

    env_pairs = getattr(args, "env", None)
    if env_pairs:
        env = dict(config.env)
        for key, value in env_pairs:
            env[key] = value
        overrides["env"] = env

    return replace(config, **overrides)
