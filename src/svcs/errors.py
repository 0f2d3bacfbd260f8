"""Exceptions raised by the SVCS repository."""


class SvcsError(Exception):
    """Base exception for svcs."""

    pass


class PathNotFoundError(SvcsError):
    """Raised when a file to be tracked does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Can't find '{path}'.")
        self.path = path


class CommitNotFoundError(SvcsError):
    """Raised when no snapshot exists for a commit id."""

    def __init__(self, commit_id: str):
        super().__init__(f"Commit {commit_id} does not exist.")
        self.commit_id = commit_id


class NothingToCommitError(SvcsError):
    """Raised when there are no tracked files or their content is unchanged."""

    pass


class StorageError(SvcsError):
    """Raised when reading or writing repository files fails."""

    pass
