"""
pkg-config environment for cross builds.

pkg-config refuses to hand out host paths for a foreign target unless it is
pointed at the sysroot explicitly. This module computes the variables that
do so.
"""

from dataclasses import dataclass
from typing import Dict

from crossbuild.cross.sysroot import SysrootLayout

DEFAULT_HOST_PKG_CONFIG_PATH = "/usr/lib/pkgconfig"


@dataclass
class PkgConfigEnvironment:
    """
    pkg-config variables exported to the build tool.

    Attributes:
        config_dir: PKG_CONFIG_DIR, cleared so no default directory leaks in
        libdir: PKG_CONFIG_LIBDIR, colon-separated sysroot search path
        sysroot_dir: PKG_CONFIG_SYSROOT_DIR, prefixed onto reported paths
        allow_cross: PKG_CONFIG_ALLOW_CROSS, lets the pkg-config crate run
            when host and target differ
        path: PKG_CONFIG_PATH
    """

    config_dir: str
    libdir: str
    sysroot_dir: str
    allow_cross: str
    path: str

    @classmethod
    def for_sysroot(
        cls, sysroot: str, host_path: str = DEFAULT_HOST_PKG_CONFIG_PATH
    ) -> "PkgConfigEnvironment":
        """
        Build the environment for a sysroot.

        Example:
            >>> env = PkgConfigEnvironment.for_sysroot("/home/user/build/root")
            >>> env.libdir
            '/home/user/build/root/usr/lib/pkgconfig:/home/user/build/root/usr/share/pkgconfig'
        """
        layout = SysrootLayout(sysroot)
        return cls(
            config_dir="",
            libdir=":".join(layout.pkgconfig_dirs),
            sysroot_dir=sysroot,
            allow_cross="1",
            path=host_path,
        )

    def to_env(self) -> Dict[str, str]:
        """Return the variables in export order."""
        return {
            "PKG_CONFIG_DIR": self.config_dir,
            "PKG_CONFIG_LIBDIR": self.libdir,
            "PKG_CONFIG_SYSROOT_DIR": self.sysroot_dir,
            "PKG_CONFIG_ALLOW_CROSS": self.allow_cross,
            "PKG_CONFIG_PATH": self.path,
        }
