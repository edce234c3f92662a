"""
Centralized exception hierarchy for crossbuild.

Every error raised by the library derives from CrossBuildError so the CLI
can handle them at a single dispatch boundary.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class CrossBuildError(Exception):
    """Base exception for all crossbuild errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(CrossBuildError):
    """Configuration parsing or validation error."""

    pass


class InvalidTargetError(ConfigError):
    """Raised when a target triple cannot be parsed."""

    def __init__(self, target: str, reason: str = ""):
        self.target = target
        msg = f"Invalid target triple: {target!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


# ============================================================================
# Build Exceptions
# ============================================================================


class BuildToolNotFoundError(CrossBuildError):
    """Raised when the build tool executable cannot be found."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Build tool not found: {tool}")


class ScriptGenerationError(CrossBuildError):
    """Raised when the standalone wrapper script cannot be rendered or written."""

    pass
