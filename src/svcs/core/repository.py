"""SVCS repository management on the local filesystem."""

import logging
import shutil
from pathlib import Path
from typing import List, Optional

from svcs.core.hashing import snapshot_hash
from svcs.errors import (
    CommitNotFoundError,
    NothingToCommitError,
    PathNotFoundError,
    StorageError,
)
from svcs.models.commit import Commit
from svcs.models.settings import Settings

logger = logging.getLogger(__name__)

# Command line arguments may carry undecodable bytes as surrogates; keep them
# as the original bytes on disk.
TEXT_ERRORS = "surrogateescape"


class SvcsRepository:
    """Handle on the ``vcs`` directory of a project.

    Every operation reads and writes the files under the root directory
    directly; nothing is cached between calls.
    """

    def __init__(self, project_root: Path, settings: Optional[Settings] = None):
        self.project_root = Path(project_root)
        self.settings = settings or Settings()
        self.root_dir = self.project_root / self.settings.root_name
        self.config_file = self.root_dir / "config.txt"
        self.index_file = self.root_dir / "index.txt"
        self.log_file = self.root_dir / "log.txt"
        self.commits_dir = self.root_dir / "commits"

    def exists(self) -> bool:
        """Check if the root directory exists."""
        return self.root_dir.is_dir()

    def init(self) -> bool:
        """Create the root directory and its metadata files if missing.

        Returns True when the repository was created, False when the root
        directory already existed. Raises OSError if creation fails.
        """
        if self.exists():
            return False

        self.root_dir.mkdir(parents=True)
        self.index_file.write_text(
            self.settings.index_header, encoding="utf-8", errors=TEXT_ERRORS
        )
        self.config_file.touch()
        logger.debug("Initialized repository in %s", self.root_dir)
        return True

    # Config

    def get_username(self) -> Optional[str]:
        """Return the first line of the config file, if there is one."""
        if not self.config_file.exists():
            return None

        text = self.config_file.read_text(encoding="utf-8", errors=TEXT_ERRORS)
        lines = text.splitlines()
        return lines[0] if lines else None

    def set_username(self, username: str) -> None:
        try:
            self.config_file.write_text(username, encoding="utf-8", errors=TEXT_ERRORS)
        except OSError as e:
            raise StorageError(f"Could not write {self.config_file}: {e}") from e
        logger.debug("Username set to %r", username)

    # Index

    def index_text(self) -> str:
        return self.index_file.read_text(encoding="utf-8", errors=TEXT_ERRORS)

    def tracked_files(self) -> List[str]:
        """Return tracked file names in the order they were added."""
        return self.index_text().splitlines()[1:]

    def track(self, filename: str) -> None:
        """Append a file name to the index.

        Raises PathNotFoundError when the name is empty or the file is not in
        the project.
        """
        if not filename or not (self.project_root / filename).exists():
            raise PathNotFoundError(filename)

        try:
            with open(self.index_file, "a", encoding="utf-8", errors=TEXT_ERRORS) as f:
                f.write(f"\n{filename}")
        except OSError as e:
            raise StorageError(f"Could not update {self.index_file}: {e}") from e
        logger.debug("Tracking %s", filename)

    # Commits

    def _tracked_paths(self, names: List[str]) -> List[Path]:
        return [self.project_root / name.strip() for name in names]

    def compute_hash(self, names: Optional[List[str]] = None) -> str:
        """Hash the current content of the tracked files.

        Tracked files missing from disk contribute no content.
        """
        if names is None:
            names = self.tracked_files()

        return snapshot_hash(
            path.read_bytes() for path in self._tracked_paths(names) if path.is_file()
        )

    def commit_exists(self, commit_id: str) -> bool:
        if not commit_id or commit_id in (".", ".."):
            return False
        if "/" in commit_id or "\\" in commit_id:
            return False
        return (self.commits_dir / commit_id).is_dir()

    def commit(self, message: str) -> Commit:
        """Snapshot the tracked files and append a record to the log."""
        names = self.tracked_files()
        if not names:
            raise NothingToCommitError("No files are tracked.")

        try:
            commit_id = self.compute_hash(names)
            commit_dir = self.commits_dir / commit_id
            if commit_dir.exists():
                raise NothingToCommitError(f"Snapshot {commit_id} already exists.")

            commit_dir.mkdir(parents=True)
            for source in self._tracked_paths(names):
                if source.is_file():
                    shutil.copyfile(source, commit_dir / source.name)
                    logger.debug("Copied %s into %s", source, commit_dir)

            commit = Commit(
                id=commit_id,
                author=self.get_username() or self.settings.unknown_author,
                message=message,
            )
            with open(self.log_file, "a", encoding="utf-8", errors=TEXT_ERRORS) as f:
                f.write(commit.to_log_record())
        except OSError as e:
            raise StorageError(f"Could not write commit: {e}") from e

        logger.debug("Created commit %s by %s", commit.id, commit.author)
        return commit

    # Log

    def log_lines(self) -> List[str]:
        """Return the raw lines of the log, oldest first."""
        if not self.log_file.exists():
            return []
        text = self.log_file.read_text(encoding="utf-8", errors=TEXT_ERRORS)
        return text.splitlines()

    def commits(self) -> List[Commit]:
        """Return parsed commit records, oldest first."""
        if not self.log_file.exists():
            return []
        text = self.log_file.read_text(encoding="utf-8", errors=TEXT_ERRORS)
        return Commit.parse_log(text)

    # Checkout

    def checkout(self, commit_id: str) -> List[str]:
        """Overwrite project files with their copies from a commit.

        Only files already present in the project are restored; the names of
        the restored files are returned.
        """
        if not self.commit_exists(commit_id):
            raise CommitNotFoundError(commit_id)

        restored = []
        try:
            for snapshot in sorted((self.commits_dir / commit_id).iterdir()):
                target = self.project_root / snapshot.name
                if not snapshot.is_file() or not target.exists():
                    continue
                shutil.copyfile(snapshot, target)
                restored.append(snapshot.name)
                logger.debug("Restored %s from %s", snapshot.name, commit_id)
        except OSError as e:
            raise StorageError(f"Could not restore commit {commit_id}: {e}") from e

        return restored
