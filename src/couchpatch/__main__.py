"""Entry point for ``python -m couchpatch``."""

from .cli import app

app()
