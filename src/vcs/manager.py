"""Resolve VCS notations to commits and keep working copies current.

The manager is VCS-agnostic: everything it knows about a repository comes
from the accessor it was constructed with.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from constants import VcsType
from common.fs_utils import clear_directory
from common.logging_utils import extra_context, is_debug_enabled, redact_credentials, safe_url
from .accessors import VcsAccessor, create_accessor
from .context import ResolveContext
from .errors import ConfigurationError, DependencyResolutionError
from .models import (
    ByBranch,
    ByCommit,
    ByTag,
    CloneAttempt,
    Commit,
    Latest,
    NotationDependency,
    ResolvedDependency,
)

logger = logging.getLogger(__name__)

Dependency = Union[NotationDependency, ResolvedDependency]


class VcsDependencyManager:
    """Resolves one dependency at a time against a local working copy.

    The caller must hold exclusive access to ``repo_root`` for the duration
    of a call; see ``RepositoryCache.lock``.
    """

    def __init__(self, accessor: VcsAccessor):
        self.accessor = accessor

    @property
    def vcs_type(self) -> VcsType:
        """VCS of the underlying accessor."""
        return self.accessor.vcs_type

    # Caller-facing operations

    def resolve(self, dependency: NotationDependency, context: ResolveContext, repo_root: str) -> ResolvedDependency:
        """Resolve a notation to a checked-out commit and build its record."""
        self.ensure_local_copy_current(dependency, repo_root)
        commit = self.determine_version(repo_root, dependency)
        self.reset_to_specific_version(repo_root, commit)
        return self.create_resolved_dependency(dependency, repo_root, commit, context)

    def ensure_local_copy_current(self, dependency: Dependency, repo_root: str) -> List[CloneAttempt]:
        """Clone, update, or reuse the working copy so it can serve dependency.

        Returns:
            Clone attempts made (empty when the directory was already a repository).
        """
        if not self.accessor.is_repository(repo_root):
            if not isinstance(dependency, NotationDependency):
                raise ConfigurationError(f"No working copy at {repo_root} for resolved dependency {dependency}")
            attempts = self.init_repository(dependency.name, dependency.urls, repo_root)
            self._log_attempts(dependency.name, attempts)
            return attempts

        if self.version_exists_in_repo(repo_root, dependency):
            logger.debug("%s already present in %s, skipping fetch", dependency, repo_root)
        else:
            self.update_repository(dependency, repo_root)
        return []

    # Version resolver

    def determine_version(self, repo_dir: str, dependency: NotationDependency) -> Commit:
        """Return the commit a notation resolves to in the current working copy.

        Raises:
            CommitNotFoundError: the requested commit id is absent.
            TagNotFoundError: the tag expression matched nothing.
        """
        selector = dependency.selector
        if isinstance(selector, Latest):
            return self.accessor.head_commit_of_branch(repo_dir, self.accessor.get_default_branch(repo_dir))
        if isinstance(selector, ByCommit):
            commit = self.accessor.find_commit(repo_dir, selector.commit)
            if commit is None:
                raise DependencyResolutionError.cannot_find_git_commit(dependency, selector.commit)
            return commit
        if isinstance(selector, ByTag):
            commit = self.find_matching_tag(repo_dir, selector.tag)
            if commit is None:
                raise DependencyResolutionError.cannot_find_git_tag(dependency, selector.tag, repo_dir)
            return commit
        if isinstance(selector, ByBranch):
            return self.accessor.head_commit_of_branch(repo_dir, selector.branch)
        raise TypeError(f"Unsupported version selector {selector!r} of {dependency.name}")

    # Tag matcher

    def find_matching_tag(self, repo_dir: str, tag_expression: str) -> Optional[Commit]:
        """Find a tag or branch named tag_expression, else the highest tag in that range."""
        commit = self.accessor.find_commit_by_tag_or_branch(repo_dir, tag_expression)
        if commit is not None:
            return commit
        return self._find_commit_by_sem_version(repo_dir, tag_expression)

    def _find_commit_by_sem_version(self, repo_dir: str, expression: str) -> Optional[Commit]:
        tags = self.accessor.get_all_tags(repo_dir)
        satisfied = [tag for tag in tags if tag.satisfies(expression)]
        if not satisfied:
            return None
        # sorted() is stable, so equal versions keep the accessor's order
        satisfied = sorted(satisfied, key=lambda c: c.sem_version, reverse=True)
        return satisfied[0]

    # Reuse checker

    def version_exists_in_repo(self, repo_root: str, dependency: Dependency) -> bool:
        """Return True when the working copy already holds what dependency needs.

        Never touches the network. Latest and branch requests are volatile and
        always report False.
        """
        if isinstance(dependency, ResolvedDependency):
            return self.accessor.find_commit(repo_root, dependency.version) is not None

        selector = dependency.selector
        if isinstance(selector, Latest):
            return False
        if isinstance(selector, ByCommit):
            return self.accessor.find_commit(repo_root, selector.commit) is not None
        if isinstance(selector, ByTag):
            return self.find_matching_tag(repo_root, selector.tag) is not None
        if isinstance(selector, ByBranch):
            # branches move; always pull
            return False
        raise TypeError(f"Unsupported version selector {selector!r} of {dependency.name}")

    # Repository acquirer

    def init_repository(self, name: str, urls: Sequence[str], repo_root: str) -> List[CloneAttempt]:
        """Clone from the first working URL, then run one update pass.

        Raises:
            ConfigurationError: urls is empty (nothing is touched on disk).
            CannotCloneRepositoryError: every URL failed; chained to the last cause.
        """
        attempts = self._try_clone_with_urls(name, urls, repo_root)
        # Some backends need a fetch after clone before every tag is visible.
        self.update_repository(None, repo_root)
        return attempts

    def _try_clone_with_urls(self, name: str, urls: Sequence[str], directory: str) -> List[CloneAttempt]:
        if not urls:
            raise ConfigurationError(f"Urls of {name} should not be empty!")
        attempts: List[CloneAttempt] = []
        for i, url in enumerate(urls):
            clear_directory(directory)
            try:
                self.accessor.clone(url, directory)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                attempts.append(CloneAttempt(url=url, cause=exc))
                if i == len(urls) - 1:
                    raise DependencyResolutionError.cannot_clone_repository(name, exc, attempts) from exc
                continue
            attempts.append(CloneAttempt(url=url))
            return attempts
        return attempts

    def update_repository(self, dependency: Optional[Dependency], repo_root: str) -> None:
        """Fetch new history into an existing working copy. No retry."""
        url = safe_url(self.accessor.get_remote_url(repo_root))
        if dependency is None:
            logger.info("Fetching from %s", url)
        else:
            logger.info("Fetching %s from %s", dependency, url)
        self.accessor.update(repo_root)

    # Checkout / reset

    def do_reset(self, dependency: ResolvedDependency, repo_root: str) -> None:
        """Check out a previously resolved dependency's commit."""
        self.accessor.checkout(repo_root, dependency.version)

    def reset_to_specific_version(self, repository: str, commit: Commit) -> None:
        """Check out commit in the working copy."""
        self.accessor.checkout(repository, commit.id)

    # Resolved dependency construction

    def create_resolved_dependency(
        self,
        dependency: NotationDependency,
        repo_root: str,
        commit: Commit,
        context: ResolveContext,
    ) -> ResolvedDependency:
        """Build the resolved record and attach its transitive dependencies."""
        resolved = ResolvedDependency(
            name=dependency.name,
            commit_id=commit.id,
            commit_time=commit.commit_time,
            notation=dependency,
        )
        resolved.attach_dependencies(context.produce_transitive_dependencies(resolved, repo_root))
        return resolved

    @staticmethod
    def _log_attempts(name: str, attempts: Sequence[CloneAttempt]) -> None:
        for attempt in attempts:
            if attempt.succeeded:
                logger.info("Cloned %s from %s", name, safe_url(attempt.url))
            elif is_debug_enabled(logger):
                logger.debug(
                    "Cloning with url %s failed, the cause is %s",
                    safe_url(attempt.url),
                    redact_credentials(str(attempt.cause)),
                    extra=extra_context(
                        event="clone_attempt",
                        component="vcs_manager",
                        action="clone",
                        outcome="failure",
                        target=safe_url(attempt.url),
                        dependency=name,
                    ),
                )


def create_manager(vcs_type: VcsType) -> VcsDependencyManager:
    """Build a manager backed by the accessor for vcs_type."""
    return VcsDependencyManager(create_accessor(vcs_type))
