"""SVCS - a small snapshot version control system."""

__version__ = "0.1.0"
