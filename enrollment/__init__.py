"""enrollment: command pipeline for creating users."""

__version__ = "0.1.0"
