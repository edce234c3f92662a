"""
Sysroot derivation for cross-compilation.

The sysroot is derived from the user's home directory by plain string
concatenation, mirroring ``${HOME}/build/root`` in a POSIX shell.
"""

from pathlib import Path
from typing import List, Mapping

DEFAULT_SYSROOT_RELPATH = "build/root"

PKGCONFIG_SUBDIRS = ("usr/lib/pkgconfig", "usr/share/pkgconfig")


def home_from_environ(environ: Mapping[str, str]) -> str:
    """
    Return the home directory the way the shell expands ``${HOME}``.

    An unset HOME expands to the empty string.
    """
    return environ.get("HOME", "")


def resolve_sysroot(home: str, relative: str = DEFAULT_SYSROOT_RELPATH) -> str:
    """
    Derive the sysroot path.

    Args:
        home: Home directory path, used verbatim
        relative: Sysroot location relative to home. An absolute path is
            used as-is and ignores home.

    Returns:
        Sysroot path as a string (no normalisation applied)

    Example:
        >>> resolve_sysroot("/home/user")
        '/home/user/build/root'
    """
    if relative.startswith("/"):
        return relative
    return f"{home}/{relative}"


class SysrootLayout:
    """Expected directory layout of a sysroot, used for diagnostics."""

    def __init__(self, root: str):
        self.root = root

    @property
    def pkgconfig_dirs(self) -> List[str]:
        """pkg-config search directories inside the sysroot, in lookup order."""
        return [f"{self.root}/{subdir}" for subdir in PKGCONFIG_SUBDIRS]

    def exists(self) -> bool:
        return Path(self.root).is_dir()

    def missing_dirs(self) -> List[str]:
        """Return the pkg-config directories that do not exist on disk."""
        return [d for d in self.pkgconfig_dirs if not Path(d).is_dir()]
