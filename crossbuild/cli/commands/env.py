"""
Env command implementation.

Prints the cross-compilation environment, either as shell ``export`` lines
suitable for ``eval "$(crossbuild env)"`` or as JSON.
"""

import json
import logging
import shlex

from crossbuild.build.runner import prepare_invocation
from crossbuild.cli.utils import load_effective_config

logger = logging.getLogger(__name__)


def format_env(env: dict, fmt: str = "sh") -> str:
    """
    Format environment variables for output.

    Args:
        env: Variables to format, in export order
        fmt: 'sh' for export lines, 'json' for a JSON object

    Returns:
        Formatted text without a trailing newline
    """
    if fmt == "json":
        return json.dumps(env, indent=2)
    return "\n".join(f"export {key}={shlex.quote(value)}" for key, value in env.items())


def run(args) -> int:
    """
    Run the env command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_effective_config(args)
    invocation = prepare_invocation(config)

    logger.debug(f"Sysroot: {invocation.sysroot}")
    print(format_env(invocation.env_overlay, getattr(args, "format", "sh")))
    return 0
