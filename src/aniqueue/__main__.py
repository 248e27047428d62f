"""Allow ``python -m aniqueue``."""

from aniqueue.cli.typer_app import app

if __name__ == "__main__":
    app()
