"""Hacker Shell - a minimal interactive command loop."""

__version__ = "0.1.0"
