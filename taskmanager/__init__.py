"""Task Manager API: a Flask backend for personal task lists."""

__version__ = "1.0.0"
