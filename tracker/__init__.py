"""Sleep and meal tracker: a small FastAPI service over SQLite."""

__version__ = "0.1.0"
