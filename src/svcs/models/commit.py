"""Commit model and its log file encoding."""

from typing import List

from pydantic import BaseModel

AUTHOR_PREFIX = "Author: "
COMMIT_PREFIX = "commit "


class Commit(BaseModel):
    """A commit record as stored in the log."""

    id: str
    author: str
    message: str

    model_config = {"frozen": True}

    def to_log_record(self) -> str:
        """Render the four-line record appended to the log."""
        return f"{self.message}\n{AUTHOR_PREFIX}{self.author}\n{COMMIT_PREFIX}{self.id}\n\n"

    def to_lines(self) -> List[str]:
        return self.to_log_record().split("\n")[:-1]

    @classmethod
    def parse_log(cls, text: str) -> List["Commit"]:
        """Parse a whole log into commits, oldest first.

        A record ends at a ``commit <id>`` line directly preceded by an
        ``Author:`` line, so messages may span several lines.
        """
        lines = text.splitlines()
        commits: List[Commit] = []
        start = 0

        for i, line in enumerate(lines):
            if i - 1 < start or not line.startswith(COMMIT_PREFIX):
                continue
            if not lines[i - 1].startswith(AUTHOR_PREFIX):
                continue

            commits.append(
                cls(
                    id=line[len(COMMIT_PREFIX):],
                    author=lines[i - 1][len(AUTHOR_PREFIX):],
                    message="\n".join(lines[start : i - 1]),
                )
            )
            # Skip the blank separator line
            start = i + 2

        return commits
