"""
Build command implementation.

Exports the cross-compilation environment and runs the build tool once.
"""

import logging
import shlex

from crossbuild.build.runner import prepare_invocation, run_build
from crossbuild.cli.utils import load_effective_config, resolve_project_root
from crossbuild.core.exceptions import BuildToolNotFoundError

logger = logging.getLogger(__name__)

# Exit status a POSIX shell reports for a command it cannot find.
EXIT_TOOL_NOT_FOUND = 127


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        The build tool's exit code, or 127 if the tool is missing
    """
    config = load_effective_config(args)
    project_root = resolve_project_root(getattr(args, "project_root", None))

    invocation = prepare_invocation(config, cwd=str(project_root))

    if getattr(args, "dry_run", False):
        for key, value in invocation.env_overlay.items():
            print(f"{key}={shlex.quote(value)}")
        print(shlex.join(invocation.command))
        return 0

    try:
        return run_build(invocation)
    except BuildToolNotFoundError as e:
        logger.error(f"Error: {e}")
        return EXIT_TOOL_NOT_FOUND
