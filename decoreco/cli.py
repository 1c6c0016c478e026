"""CLI entry point for the decoreco package."""

import sys


def main():
    """Entry point for the decoreco command."""
    from decoreco.core.main import main as run
    sys.exit(run())


if __name__ == "__main__":
    main()
