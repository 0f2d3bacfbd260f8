"""Data models for SVCS."""

from .commit import Commit
from .settings import Settings

__all__ = ["Commit", "Settings"]
