"""Personal job application tracker with Gmail inbox scanning."""

__version__ = "1.0.0"
