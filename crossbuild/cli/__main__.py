"""
Entry point for running crossbuild CLI as a module.

Usage: python -m crossbuild.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
