"""Allow running coreupdater as a module: python -m coreupdater."""

from coreupdater.cli.main import app

app()
