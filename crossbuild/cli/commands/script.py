"""
Script command implementation.

Generates a standalone shell wrapper equivalent to ``crossbuild build``.
"""

import logging
from pathlib import Path

from crossbuild.cli.utils import load_effective_config, resolve_project_root
from crossbuild.wrapper.generator import WrapperScriptGenerator

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the script command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_effective_config(args)
    generator = WrapperScriptGenerator(config)

    if getattr(args, "dry_run", False):
        print(generator.render(), end="")
        return 0

    output = getattr(args, "output", None)
    if output is None:
        project_root = resolve_project_root(getattr(args, "project_root", None))
        output = project_root / generator.default_filename

    generator.write(Path(output), force=getattr(args, "force", False))
    return 0
