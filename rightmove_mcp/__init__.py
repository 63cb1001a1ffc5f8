"""Structured search, property detail and area statistics tools over Rightmove HTML pages."""

__version__ = "1.0.0"
