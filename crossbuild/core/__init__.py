"""Core building blocks shared across crossbuild."""

from crossbuild.core.exceptions import (
    CrossBuildError,
    ConfigError,
    InvalidTargetError,
    BuildToolNotFoundError,
    ScriptGenerationError,
)

__all__ = [
    "CrossBuildError",
    "ConfigError",
    "InvalidTargetError",
    "BuildToolNotFoundError",
    "ScriptGenerationError",
]
