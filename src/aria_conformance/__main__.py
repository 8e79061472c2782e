"""Allow running as python -m aria_conformance."""

from aria_conformance.cli.main import app

if __name__ == "__main__":
    app()
