"""Build tool invocation for crossbuild."""

from crossbuild.build.runner import (
    BuildInvocation,
    build_command,
    child_environment,
    prepare_invocation,
    run_build,
    target_environment,
)

__all__ = [
    "BuildInvocation",
    "build_command",
    "child_environment",
    "prepare_invocation",
    "run_build",
    "target_environment",
]
