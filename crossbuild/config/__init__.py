"""Configuration loading for crossbuild."""

from crossbuild.config.parser import (
    CONFIG_FILENAME,
    CrossBuildConfig,
    find_config_file,
    load_config,
    merge_arguments,
    parse_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "CrossBuildConfig",
    "find_config_file",
    "load_config",
    "merge_arguments",
    "parse_config",
]
