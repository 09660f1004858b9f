"""Allow running as ``python -m retint``."""

from retint.cli import cli

if __name__ == "__main__":
    cli()
