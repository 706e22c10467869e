"""Allow ``python -m issue_feed``."""

from .cli.main import app

app()
