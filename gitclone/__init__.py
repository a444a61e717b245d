"""Bring a CI working directory to a requested git state."""

__version__ = "0.1.0"
