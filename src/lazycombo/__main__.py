"""
Entry point for running the demo as a module.

This allows the package to be executed with: python -m lazycombo
"""

from lazycombo.main import cli

if __name__ == "__main__":
    cli()
