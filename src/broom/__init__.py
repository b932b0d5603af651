"""Broom — interactive disk cleanup for the terminal."""

__version__ = "1.1.0"
