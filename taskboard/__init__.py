"""Task-tracking API with per-user ownership of tasks."""

__version__ = "1.0.0"
