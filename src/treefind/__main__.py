"""Allow running treefind with ``python -m treefind``."""

from treefind.cli import app

if __name__ == "__main__":
    app()
