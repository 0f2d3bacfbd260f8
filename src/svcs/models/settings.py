"""Tool settings for SVCS repositories."""

from pydantic import BaseModel


class Settings(BaseModel):
    """Names and defaults used to lay out a repository."""

    root_name: str = "vcs"
    index_header: str = "Tracked files:"
    unknown_author: str = "Unknown"

    model_config = {"frozen": True}
