"""
crossbuild CLI argument parser.

This module implements the command-line interface for crossbuild using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from crossbuild.cross.targets import DEFAULT_TARGET

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("crossbuild")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "build"

COMMAND_MODULES = {
    "build": "crossbuild.cli.commands.build",
    "env": "crossbuild.cli.commands.env",
    "script": "crossbuild.cli.commands.script",
    "doctor": "crossbuild.cli.commands.doctor",
}


def _env_pair(text: str) -> List[str]:
    """argparse type for KEY=VALUE pairs."""
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return text.split("=", 1)


class CLI:
    """crossbuild command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="crossbuild",
            description="crossbuild - cross-compile cargo projects against a sysroot",
            epilog='Runs "build" when no command is given. '
            'Use "crossbuild COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"crossbuild {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./crossbuild.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_build_command(subparsers)
        self._add_env_command(subparsers)
        self._add_script_command(subparsers)
        self._add_doctor_command(subparsers)

        return parser

    def _add_target_options(self, parser):
        """Add options shared by every command that resolves the environment."""
        parser.add_argument(
            "--target",
            metavar="TRIPLE",
            help=f"Target triple (default: {DEFAULT_TARGET})",
        )
        parser.add_argument(
            "--tool",
            metavar="NAME",
            help="Build tool executable (default: cargo)",
        )
        parser.add_argument(
            "--sysroot",
            metavar="PATH",
            help="Sysroot, relative to $HOME unless absolute (default: build/root)",
        )
        parser.add_argument(
            "--linker",
            metavar="PATH",
            help="Linker for the target, exported as CARGO_TARGET_<TRIPLE>_LINKER",
        )
        parser.add_argument(
            "--env",
            action="append",
            type=_env_pair,
            metavar="KEY=VALUE",
            help="Extra environment variables to set (can be used multiple times)",
        )

    def _add_build_command(self, subparsers):
        """Add 'build' subcommand."""
        parser = subparsers.add_parser(
            "build",
            help="Run the build tool for the target",
            description="Export the cross-compilation environment and run the build tool",
        )
        self._add_target_options(parser)
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the environment and command without running it",
        )
        parser.add_argument(
            "tool_args",
            nargs="*",
            metavar="ARG",
            help="Extra arguments for the build tool (after --)",
        )

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        parser = subparsers.add_parser(
            "env",
            help="Print the cross-compilation environment",
            description='Print exported variables (use: eval "$(crossbuild env)")',
        )
        self._add_target_options(parser)
        parser.add_argument(
            "--format",
            choices=["sh", "json"],
            default="sh",
            help="Output format (default: sh)",
        )

    def _add_script_command(self, subparsers):
        """Add 'script' subcommand."""
        parser = subparsers.add_parser(
            "script",
            help="Generate a standalone wrapper script",
            description="Generate a POSIX shell script equivalent to 'crossbuild build'",
        )
        self._add_target_options(parser)
        parser.add_argument(
            "--output",
            "-o",
            type=Path,
            metavar="PATH",
            help="Output file (default: build-<target>.sh in the project root)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite an existing script",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the script without writing it",
        )

    def _add_doctor_command(self, subparsers):
        """Add 'doctor' subcommand."""
        parser = subparsers.add_parser(
            "doctor",
            help="Diagnose the cross-compilation environment",
            description="Check sysroot, pkg-config directories and build tool",
        )
        self._add_target_options(parser)

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        if args is None:
            args = sys.argv[1:]
        return self.parser.parse_args(self._with_default_command(list(args)))

    def _with_default_command(self, argv: List[str]) -> List[str]:
        """
        Insert the default command before a bare ``--`` separator.

        ``crossbuild -- --release`` means ``crossbuild build -- --release``.
        """
        if "--" not in argv:
            return argv
        index = argv.index("--")
        if any(arg in COMMAND_MODULES for arg in argv[:index]):
            return argv
        return argv[:index] + [DEFAULT_COMMAND] + argv[index:]

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (the build tool's exit code for 'build')
        """
        argv = list(sys.argv[1:] if args is None else args)
        parsed_args = self.parse_args(argv)

        if not parsed_args.command:
            parsed_args = self.parse_args(argv + [DEFAULT_COMMAND])

        # Configure logging
        self._configure_logging(parsed_args)

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
