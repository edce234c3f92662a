"""
Build tool invocation.

Composes the cross-compilation environment with the build command and runs
it once. The tool's exit status is returned unchanged; output is not
captured so the tool talks to the terminal directly.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence
import logging
import os
import subprocess

from crossbuild.config.parser import CrossBuildConfig
from crossbuild.core.exceptions import BuildToolNotFoundError
from crossbuild.cross.pkgconfig import PkgConfigEnvironment
from crossbuild.cross.sysroot import home_from_environ, resolve_sysroot
from crossbuild.cross.targets import TargetTriple, parse_target_triple

logger = logging.getLogger(__name__)


@dataclass
class BuildInvocation:
    """
    A fully resolved build tool invocation.

    Attributes:
        command: Argument vector, tool first
        env_overlay: Variables set on top of the caller's environment
        sysroot: Sysroot the overlay was derived from
        cwd: Working directory for the tool (None for current directory)
    """

    command: List[str]
    env_overlay: Dict[str, str] = field(default_factory=dict)
    sysroot: str = ""
    cwd: Optional[str] = None


def build_command(
    target: TargetTriple,
    tool: str = "cargo",
    subcommand: str = "build",
    extra_args: Sequence[str] = (),
) -> List[str]:
    """
    Build the argument vector for the build tool.

    Example:
        >>> build_command(parse_target_triple("aarch64-unknown-linux-gnu"))
        ['cargo', 'build', '--target', 'aarch64-unknown-linux-gnu']
    """
    return [tool, subcommand, "--target", str(target), *extra_args]


def target_environment(config: CrossBuildConfig) -> Dict[str, str]:
    """
    Return per-target cargo variables for the configured target.

    Example:
        >>> target_environment(CrossBuildConfig(linker="aarch64-linux-gnu-gcc"))
        {'CARGO_TARGET_AARCH64_UNKNOWN_LINUX_GNU_LINKER': 'aarch64-linux-gnu-gcc'}
    """
    env = {}
    if config.linker:
        suffix = parse_target_triple(config.target).cargo_env_suffix()
        env[f"CARGO_TARGET_{suffix}_LINKER"] = config.linker
    return env


def prepare_invocation(
    config: CrossBuildConfig,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
) -> BuildInvocation:
    """
    Resolve a configuration into a BuildInvocation.

    Args:
        config: Effective configuration
        environ: Environment to read HOME from (defaults to os.environ)
        cwd: Working directory for the tool

    Returns:
        BuildInvocation ready to run
    """
    if environ is None:
        environ = os.environ

    sysroot = resolve_sysroot(home_from_environ(environ), config.sysroot)
    pkg_env = PkgConfigEnvironment.for_sysroot(sysroot, config.pkg_config_path)

    overlay = pkg_env.to_env()
    overlay.update(target_environment(config))
    overlay.update(config.env)

    command = build_command(
        parse_target_triple(config.target),
        tool=config.tool,
        subcommand=config.subcommand,
        extra_args=config.args,
    )

    logger.debug(f"Sysroot: {sysroot}")
    return BuildInvocation(
        command=command, env_overlay=overlay, sysroot=sysroot, cwd=cwd
    )


def child_environment(
    invocation: BuildInvocation, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Return a copy of the environment with the invocation overlay applied."""
    if environ is None:
        environ = os.environ
    env = dict(environ)
    env.update(invocation.env_overlay)
    return env


def run_build(
    invocation: BuildInvocation, environ: Optional[Mapping[str, str]] = None
) -> int:
    """
    Run the build tool once.

    Args:
        invocation: Resolved invocation
        environ: Base environment (defaults to os.environ)

    Returns:
        The tool's exit status, or 128 + N when it was killed by signal N

    Raises:
        BuildToolNotFoundError: If the tool executable cannot be found
    """
    env = child_environment(invocation, environ)

    for key, value in invocation.env_overlay.items():
        logger.debug(f"  {key}={value}")
    logger.debug(f"Running: {' '.join(invocation.command)}")

    try:
        result = subprocess.run(invocation.command, env=env, cwd=invocation.cwd)
    except FileNotFoundError as e:
        raise BuildToolNotFoundError(invocation.command[0]) from e

    logger.debug(f"Build tool exited with status {result.returncode}")
    if result.returncode < 0:
        return 128 - result.returncode
    return result.returncode
