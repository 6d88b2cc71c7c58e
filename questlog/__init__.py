"""Questlog: JWT-authenticated task and character tracking API."""

__version__ = "0.1.0"
