"""Base accessor interface over a version control command line."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from constants import VcsType
from ..models import Commit


class VcsAccessor(ABC):
    """Abstract capability for querying and mutating a local working copy.

    The resolver only talks to repositories through this interface, so it
    never needs to know which VCS backs a directory.

    Conventions:
    - lookups return None when the revision is absent instead of raising
    - mutating operations raise AccessorError on failure
    """

    metadata_dir: str = ""

    @property
    @abstractmethod
    def vcs_type(self) -> VcsType:
        """Return the VCS this accessor drives."""

    def is_repository(self, directory: str) -> bool:
        """Return True when the directory already holds a working copy."""
        return bool(self.metadata_dir) and os.path.isdir(os.path.join(directory, self.metadata_dir))

    @abstractmethod
    def clone(self, url: str, directory: str) -> None:
        """Clone url into an existing, empty directory."""
        raise NotImplementedError

    @abstractmethod
    def update(self, directory: str) -> None:
        """Fetch new history and tags from the remote."""
        raise NotImplementedError

    @abstractmethod
    def checkout(self, directory: str, commit_id: str) -> None:
        """Move the working tree to commit_id."""
        raise NotImplementedError

    @abstractmethod
    def find_commit(self, directory: str, commit_id: str) -> Optional[Commit]:
        """Look up a commit by (possibly abbreviated) id."""
        raise NotImplementedError

    @abstractmethod
    def find_commit_by_tag_or_branch(self, directory: str, name: str) -> Optional[Commit]:
        """Look up the commit a tag or branch name points to."""
        raise NotImplementedError

    @abstractmethod
    def head_commit_of_branch(self, directory: str, branch: str) -> Commit:
        """Return the head of a branch; raises AccessorError when it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def get_default_branch(self, directory: str) -> str:
        """Return the name of the remote's default branch."""
        raise NotImplementedError

    @abstractmethod
    def get_all_tags(self, directory: str) -> List[Commit]:
        """Return one Commit per tag, each carrying its tag name."""
        raise NotImplementedError

    @abstractmethod
    def get_remote_url(self, directory: str) -> str:
        """Return the URL the working copy fetches from."""
        raise NotImplementedError


def to_datetime(epoch_seconds: str) -> Optional[datetime]:
    """Convert a unix timestamp string to an aware UTC datetime."""
    try:
        return datetime.fromtimestamp(int(float(epoch_seconds)), tz=timezone.utc)
    except (TypeError, ValueError):
        return None
