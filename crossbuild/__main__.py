"""
Entry point for running crossbuild as a module.

Usage: python -m crossbuild [command] [options]
"""

from crossbuild.cli.parser import main

if __name__ == "__main__":
    main()
