"""Entry point for the inkwell CLI.

This module serves as the main entry point when running the inkwell package
directly with ``python -m inkwell``.
"""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
