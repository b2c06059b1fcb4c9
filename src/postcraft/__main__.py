"""Allow ``python -m postcraft``."""

from postcraft.cli.main import app

if __name__ == "__main__":
    app()
