"""
Cross-compilation target triples.

This module parses and represents the target triples handed to the build
tool (e.g. ``aarch64-unknown-linux-gnu``).
"""

from dataclasses import dataclass
from typing import Optional

from crossbuild.core.exceptions import InvalidTargetError

DEFAULT_TARGET = "aarch64-unknown-linux-gnu"


@dataclass(frozen=True)
class TargetTriple:
    """
    Cross-compilation target triple.

    Attributes:
        arch: Target CPU architecture (e.g., 'aarch64', 'armv7')
        vendor: Vendor component (e.g., 'unknown', 'apple')
        os: Target operating system (e.g., 'linux', 'none')
        abi: Optional ABI / environment (e.g., 'gnu', 'musl', 'gnueabihf')
    """

    arch: str
    vendor: str
    os: str
    abi: Optional[str] = None

    def __str__(self) -> str:
        parts = [self.arch, self.vendor, self.os]
        if self.abi:
            parts.append(self.abi)
        return "-".join(parts)

    def cargo_env_suffix(self) -> str:
        """
        Return the triple in the form cargo uses for per-target variables.

        Example:
            >>> parse_target_triple("aarch64-unknown-linux-gnu").cargo_env_suffix()
            'AARCH64_UNKNOWN_LINUX_GNU'
        """
        return str(self).upper().replace("-", "_")


def parse_target_triple(text: str) -> TargetTriple:
    """
    Parse a dashed target triple.

    Args:
        text: Triple in the form ``arch-vendor-os[-abi]``

    Returns:
        Parsed TargetTriple

    Raises:
        InvalidTargetError: If the triple has the wrong number of components
            or an empty component

    Example:
        >>> triple = parse_target_triple("aarch64-unknown-linux-gnu")
        >>> triple.arch, triple.abi
        ('aarch64', 'gnu')
    """
    parts = text.split("-")
    if len(parts) not in (3, 4):
        raise InvalidTargetError(
            text, f"expected 3 or 4 components, got {len(parts)}"
        )
    if any(not part for part in parts):
        raise InvalidTargetError(text, "empty component")

    return TargetTriple(*parts)
