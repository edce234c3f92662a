"""
Doctor command for diagnosing the cross-compilation environment.

Checks that the sysroot and its pkg-config directories exist, that the build
tool is on PATH, and that the Rust target is installed. Diagnostics never
gate the build command.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import os
import shutil
import subprocess

from crossbuild.cli.utils import load_effective_config
from crossbuild.config.parser import CrossBuildConfig
from crossbuild.cross.sysroot import SysrootLayout, home_from_environ, resolve_sysroot

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a health check."""

    name: str
    passed: bool
    message: str
    fix_command: Optional[str] = None


class EnvironmentChecker:
    """Check cross-compilation environment health."""

    def __init__(self, config: CrossBuildConfig, environ=None):
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.sysroot = resolve_sysroot(home_from_environ(self.environ), config.sysroot)

    def check_sysroot(self) -> CheckResult:
        layout = SysrootLayout(self.sysroot)
        if layout.exists():
            return CheckResult(name="Sysroot", passed=True, message=self.sysroot)
        return CheckResult(
            name="Sysroot",
            passed=False,
            message=f"Sysroot not found: {self.sysroot}",
            fix_command=f"Populate a target root filesystem at {self.sysroot}",
        )

    def check_pkgconfig_dirs(self) -> CheckResult:
        missing = SysrootLayout(self.sysroot).missing_dirs()
        if not missing:
            return CheckResult(
                name="pkg-config", passed=True, message="Sysroot search paths present"
            )
        return CheckResult(
            name="pkg-config",
            passed=False,
            message=f"Missing: {', '.join(missing)}",
            fix_command="Install the target's -dev packages into the sysroot",
        )

    def check_build_tool(self) -> CheckResult:
        tool = self.config.tool
        path = shutil.which(tool, path=self.environ.get("PATH"))
        if path:
            return CheckResult(name="Build tool", passed=True, message=path)
        return CheckResult(
            name="Build tool",
            passed=False,
            message=f"{tool} not found in PATH",
            fix_command="Install Rust from https://rustup.rs/",
        )

    def check_rust_target(self) -> CheckResult:
        """
        Check that the target's standard library is installed via rustup.

        Passes with a note when rustup itself is unavailable.
        """
        target = self.config.target
        try:
            result = subprocess.run(
                ["rustup", "target", "list", "--installed"],
                capture_output=True,
                text=True,
                timeout=10,
            )
        except FileNotFoundError:
            return CheckResult(
                name="Rust target", passed=True, message="rustup not found, skipped"
            )
        except subprocess.TimeoutExpired:
            return CheckResult(
                name="Rust target", passed=False, message="rustup check timed out"
            )

        installed = result.stdout.split()
        if result.returncode == 0 and target in installed:
            return CheckResult(name="Rust target", passed=True, message=target)
        return CheckResult(
            name="Rust target",
            passed=False,
            message=f"{target} not installed",
            fix_command=f"rustup target add {target}",
        )

    def run_all(self) -> List[CheckResult]:
        return [
            self.check_sysroot(),
            self.check_pkgconfig_dirs(),
            self.check_build_tool(),
            self.check_rust_target(),
        ]


def run(args) -> int:
    """
    Run the doctor command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if all checks passed, 1 otherwise)
    """
    config = load_effective_config(args)
    results = EnvironmentChecker(config).run_all()

    for result in results:
        status = "[OK]" if result.passed else "[FAIL]"
        print(f"{status} {result.name}: {result.message}")
        if not result.passed and result.fix_command:
            print(f"       fix: {result.fix_command}")

    failed = [r for r in results if not r.passed]
    if failed:
        logger.debug(f"{len(failed)} check(s) failed")
        return 1
    return 0
