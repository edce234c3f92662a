"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
from pathlib import Path
from typing import Optional

from crossbuild.config.parser import CrossBuildConfig, load_config, merge_arguments

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_effective_config(args) -> CrossBuildConfig:
    """
    Load the project configuration and apply command-line overrides.

    Args:
        args: Parsed command-line arguments with project_root and config

    Returns:
        Effective configuration

    Raises:
        ConfigError: If the configuration file is invalid
    """
    project_root = resolve_project_root(getattr(args, "project_root", None))
    config_file = getattr(args, "config", None)
    config = merge_arguments(load_config(project_root, config_file), args)
    logger.debug(f"Effective configuration: {config}")
    return config


# ============================================================================
# Path Utilities
# ============================================================================


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return Path(path).resolve()
