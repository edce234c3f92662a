"""
Cross-compilation support for crossbuild.

This module provides target triple handling, sysroot derivation and the
pkg-config environment used when building for a foreign target.
"""

from crossbuild.cross.targets import DEFAULT_TARGET, TargetTriple, parse_target_triple
from crossbuild.cross.sysroot import (
    DEFAULT_SYSROOT_RELPATH,
    SysrootLayout,
    home_from_environ,
    resolve_sysroot,
)
from crossbuild.cross.pkgconfig import PkgConfigEnvironment

__all__ = [
    "DEFAULT_TARGET",
    "TargetTriple",
    "parse_target_triple",
    "DEFAULT_SYSROOT_RELPATH",
    "SysrootLayout",
    "home_from_environ",
    "resolve_sysroot",
    "PkgConfigEnvironment",
]
