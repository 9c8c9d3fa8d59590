"""Allow running hunkstage as ``python -m hunkstage``."""

from hunkstage.cli import app

app()
