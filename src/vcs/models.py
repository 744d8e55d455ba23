"""Data models for VCS dependency resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

import semantic_version

from constants import VcsType
from .errors import ConfigurationError
from .semver import parse_tag_version, satisfies


@dataclass(frozen=True)
class Commit:
    """An immutable VCS revision, optionally reached through a tag.

    ``sem_version`` is derived from ``tag`` and is never passed in, so the two
    cannot disagree.
    """
    id: str
    commit_time: Optional[datetime] = None
    tag: Optional[str] = None
    sem_version: Optional[semantic_version.Version] = field(init=False, default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Commit id must not be empty")
        object.__setattr__(self, "sem_version", parse_tag_version(self.tag))

    def satisfies(self, expression: str) -> bool:
        """Return True when this commit's tag version lies in the given range."""
        return satisfies(self.sem_version, expression)


@dataclass(frozen=True)
class Latest:
    """Head of the repository's default branch."""

    def __str__(self) -> str:
        return "latest"


@dataclass(frozen=True)
class ByCommit:
    """A specific commit id."""
    commit: str

    def __post_init__(self) -> None:
        if not self.commit or not self.commit.strip():
            raise ConfigurationError("Commit selector must not be blank")

    def __str__(self) -> str:
        return f"commit:{self.commit}"


@dataclass(frozen=True)
class ByTag:
    """A tag name or semantic version range."""
    tag: str

    def __post_init__(self) -> None:
        if not self.tag or not self.tag.strip():
            raise ConfigurationError("Tag selector must not be blank")

    def __str__(self) -> str:
        return f"tag:{self.tag}"


@dataclass(frozen=True)
class ByBranch:
    """Head of a named branch."""
    branch: str

    def __post_init__(self) -> None:
        if not self.branch or not self.branch.strip():
            raise ConfigurationError("Branch selector must not be blank")

    def __str__(self) -> str:
        return f"branch:{self.branch}"


VersionSelector = Union[Latest, ByCommit, ByTag, ByBranch]


@dataclass(frozen=True)
class NotationDependency:
    """Unresolved dependency request: a name, candidate URLs and one selector."""
    name: str
    selector: VersionSelector = field(default_factory=Latest)
    urls: Tuple[str, ...] = ()
    vcs_type: VcsType = VcsType.GIT

    def __str__(self) -> str:
        return f"{self.name}@{self.selector}"


def parse_notation(
    name: str,
    *,
    latest: bool = False,
    commit: Optional[str] = None,
    tag: Optional[str] = None,
    branch: Optional[str] = None,
    urls: Tuple[str, ...] = (),
    vcs_type: VcsType = VcsType.GIT,
) -> NotationDependency:
    """Build a NotationDependency from the four mutually exclusive fields.

    Raises:
        ConfigurationError: when zero or more than one selector is populated.
    """
    populated = []
    if latest:
        populated.append(Latest())
    if commit is not None and commit.strip():
        populated.append(ByCommit(commit.strip()))
    if tag is not None and tag.strip():
        populated.append(ByTag(tag.strip()))
    if branch is not None and branch.strip():
        populated.append(ByBranch(branch.strip()))

    if len(populated) != 1:
        raise ConfigurationError(
            f"Exactly one of latest/commit/tag/branch must be set for {name}, got {len(populated)}"
        )
    return NotationDependency(name=name, selector=populated[0], urls=tuple(urls), vcs_type=vcs_type)


@dataclass
class ResolvedDependency:
    """A dependency pinned to a commit.

    Identity fields are fixed after construction; the transitive dependency
    set is attached exactly once by the resolver.
    """
    name: str
    commit_id: str
    commit_time: Optional[datetime]
    notation: Optional[NotationDependency] = None
    dependencies: Optional[FrozenSet[Any]] = field(default=None, init=False)

    @property
    def version(self) -> str:
        """The pinned commit id."""
        return self.commit_id

    def attach_dependencies(self, dependencies) -> None:
        """Attach the transitive dependency set; allowed only once."""
        if self.dependencies is not None:
            raise RuntimeError(f"Dependencies of {self.name} are already attached")
        self.dependencies = frozenset(dependencies or ())

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable record."""
        return {
            "name": self.name,
            "commit": self.commit_id,
            "commit_time": self.commit_time.isoformat() if self.commit_time else None,
            "notation": str(self.notation.selector) if self.notation else None,
            "vcs": self.notation.vcs_type.value if self.notation else None,
            "dependencies": sorted(str(d) for d in (self.dependencies or ())),
        }

    def __str__(self) -> str:
        return f"{self.name}#{self.commit_id}"


@dataclass(frozen=True)
class CloneAttempt:
    """Outcome of cloning from one candidate URL."""
    url: str
    cause: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        """True when the clone from this URL worked."""
        return self.cause is None
