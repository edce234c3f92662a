"""
Standalone wrapper script generation.

Renders a POSIX shell script that exports the same environment and runs the
same command as ``crossbuild build``, for machines without crossbuild.
"""

from crossbuild.wrapper.generator import WrapperScriptGenerator

__all__ = ["WrapperScriptGenerator"]
