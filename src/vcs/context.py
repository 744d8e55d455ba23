"""Resolve context handed to the resolver by its caller."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, FrozenSet

from .models import ResolvedDependency


class ResolveContext(ABC):
    """Collaborator that discovers a resolved dependency's own dependencies."""

    @abstractmethod
    def produce_transitive_dependencies(self, dependency: ResolvedDependency, repo_root: str) -> FrozenSet[Any]:
        """Return the dependency set of ``dependency`` checked out at ``repo_root``."""
        raise NotImplementedError


class FlatResolveContext(ResolveContext):
    """Context that stops at the first level: no transitive dependencies."""

    def produce_transitive_dependencies(self, dependency: ResolvedDependency, repo_root: str) -> FrozenSet[Any]:
        return frozenset()
