"""Accessors for the supported version control systems."""

from constants import VcsType
from .base import VcsAccessor
from .git import GitAccessor
from .mercurial import MercurialAccessor

_ACCESSORS = {
    VcsType.GIT: GitAccessor,
    VcsType.MERCURIAL: MercurialAccessor,
}


def create_accessor(vcs_type: VcsType) -> VcsAccessor:
    """Instantiate the accessor for a VCS type."""
    try:
        return _ACCESSORS[vcs_type]()
    except KeyError:
        raise ValueError(f"Unsupported VCS type: {vcs_type}") from None


__all__ = [
    "VcsAccessor",
    "GitAccessor",
    "MercurialAccessor",
    "create_accessor",
]
