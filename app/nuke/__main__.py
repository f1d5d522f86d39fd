"""Allow running as ``python -m nuke``."""

from nuke.cli.main import app

if __name__ == "__main__":
    app()
