"""Exception types raised while resolving VCS dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from common.logging_utils import redact_credentials

if TYPE_CHECKING:
    from .models import CloneAttempt


class VcsResolveError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(VcsResolveError, ValueError):
    """Raised for caller/config mistakes such as an empty URL list."""


class AccessorError(VcsResolveError):
    """Raised when an underlying VCS command fails."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            redact_credentials(f"Command '{' '.join(self.command)}' failed with exit code {returncode}{detail}")
        )


class DependencyResolutionError(VcsResolveError):
    """Raised when a dependency cannot be resolved to a commit."""

    @classmethod
    def cannot_find_git_commit(cls, dependency, commit: str) -> "CommitNotFoundError":
        """Build the error for a commit id that is not in the repository."""
        return CommitNotFoundError(dependency, commit)

    @classmethod
    def cannot_find_git_tag(cls, dependency, tag: str, repo_dir) -> "TagNotFoundError":
        """Build the error for a tag expression that matches nothing."""
        return TagNotFoundError(dependency, tag, repo_dir)

    @classmethod
    def cannot_clone_repository(
        cls, name: str, cause: BaseException, attempts: Optional[List["CloneAttempt"]] = None
    ) -> "CannotCloneRepositoryError":
        """Build the error raised once every candidate URL failed to clone."""
        return CannotCloneRepositoryError(name, cause, attempts)


class CommitNotFoundError(DependencyResolutionError):
    """A requested commit id does not exist in the local copy."""

    def __init__(self, dependency, commit: str):
        self.dependency = dependency
        self.commit = commit
        super().__init__(f"Cannot find git commit {commit} of {dependency}")


class TagNotFoundError(DependencyResolutionError):
    """A tag expression matched neither a name nor a semantic version."""

    def __init__(self, dependency, tag: str, repo_dir):
        self.dependency = dependency
        self.tag = tag
        self.repo_dir = str(repo_dir)
        super().__init__(f"Cannot find git tag {tag} of {dependency} in repository {self.repo_dir}")


class CannotCloneRepositoryError(DependencyResolutionError):
    """Every candidate URL failed to clone; carries the last cause."""

    def __init__(self, name: str, cause: BaseException, attempts: Optional[List["CloneAttempt"]] = None):
        self.name = name
        self.cause = cause
        self.attempts = list(attempts or [])
        super().__init__(redact_credentials(f"Cannot clone repository of {name}: {cause}"))
