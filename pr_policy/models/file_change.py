"""File change data models."""

from typing import List

from pydantic import BaseModel


class FileChange(BaseModel):
    """One file touched by a commit."""

    path: str

    @property
    def file_name(self) -> str:
        """Last path segment, lower-cased for comparison."""
        return self.path.split("/")[-1].lower()


class CommitChangeSet(BaseModel):
    """All file changes of a single commit, in platform order."""

    commit_id: str
    changes: List[FileChange] = []
