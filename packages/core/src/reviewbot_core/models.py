from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"
    # Less common values GitHub documents for the pull request files endpoint.
    COPIED = "copied"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class FileChange:
    """One entry of a pull request's changed-file list.

    Built fresh from the GitHub response on every run and dropped once the
    prompt has been assembled.
    """

    filename: str
    status: FileStatus
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None  # absent for binary files and very large diffs

    @classmethod
    def from_github(cls, file) -> FileChange:
        """Convert a PyGithub ``File`` into a FileChange."""
        return cls(
            filename=file.filename,
            status=FileStatus(file.status),
            additions=file.additions or 0,
            deletions=file.deletions or 0,
            changes=file.changes or 0,
            patch=file.patch,
        )
