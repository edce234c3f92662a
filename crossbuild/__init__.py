"""
crossbuild - cross-compilation environment wrapper for cargo.

Exports a sysroot-aware pkg-config environment and runs the build tool
for a foreign target (aarch64-unknown-linux-gnu by default).
"""

__version__ = "0.1.0"
