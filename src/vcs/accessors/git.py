"""Git accessor driving the git command line."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from constants import Constants, VcsType
from common.process import run_command
from ..errors import AccessorError
from ..models import Commit
from .base import VcsAccessor, to_datetime

logger = logging.getLogger(__name__)

_COMMIT_ID = re.compile(r"^[0-9a-fA-F]{4,40}$")
_TAG_FORMAT = "%(refname:strip=2)%09%(objectname)%09%(*objectname)%09%(committerdate:unix)%09%(*committerdate:unix)"


class GitAccessor(VcsAccessor):
    """Accessor for git repositories."""

    metadata_dir = ".git"

    def __init__(self, git_command: Optional[str] = None, remote: Optional[str] = None):
        self.git_command = git_command or Constants.GIT_COMMAND
        self.remote = remote or Constants.GIT_REMOTE

    @property
    def vcs_type(self) -> VcsType:
        return VcsType.GIT

    def _run(self, directory: str, *args: str, check: bool = True):
        return run_command([self.git_command, *args], cwd=directory, context="git", check=check)

    def _show(self, directory: str, rev: str, tag: Optional[str] = None) -> Optional[Commit]:
        """Resolve rev to a commit, or None when git does not know it."""
        if not rev or rev.startswith("-"):
            return None
        result = self._run(directory, "show", "-s", "--format=%H%x09%ct", f"{rev}^{{commit}}", check=False)
        if result.returncode != 0 or not result.stdout.strip():
            return None
        commit_id, _, epoch = result.stdout.strip().splitlines()[0].partition("\t")
        return Commit(id=commit_id, commit_time=to_datetime(epoch), tag=tag)

    def clone(self, url: str, directory: str) -> None:
        self._run(directory, "clone", url, ".")

    def update(self, directory: str) -> None:
        self._run(directory, "fetch", "--tags", "--force", "--prune", self.remote)

    def checkout(self, directory: str, commit_id: str) -> None:
        self._run(directory, "checkout", "--force", "--quiet", commit_id)

    def find_commit(self, directory: str, commit_id: str) -> Optional[Commit]:
        if not commit_id or not _COMMIT_ID.match(commit_id):
            return None
        return self._show(directory, commit_id)

    def find_commit_by_tag_or_branch(self, directory: str, name: str) -> Optional[Commit]:
        commit = self._show(directory, f"refs/tags/{name}", tag=name)
        if commit is not None:
            return commit
        for ref in (f"refs/remotes/{self.remote}/{name}", f"refs/heads/{name}"):
            commit = self._show(directory, ref)
            if commit is not None:
                return commit
        return None

    def head_commit_of_branch(self, directory: str, branch: str) -> Commit:
        for ref in (f"refs/remotes/{self.remote}/{branch}", f"refs/heads/{branch}"):
            commit = self._show(directory, ref)
            if commit is not None:
                return commit
        raise AccessorError([self.git_command, "show", branch], None, f"branch {branch} not found")

    def get_default_branch(self, directory: str) -> str:
        result = self._run(directory, "symbolic-ref", "--short", f"refs/remotes/{self.remote}/HEAD", check=False)
        ref = result.stdout.strip()
        if result.returncode == 0 and ref:
            prefix = f"{self.remote}/"
            return ref[len(prefix):] if ref.startswith(prefix) else ref
        logger.debug("No remote HEAD in %s, assuming %s", directory, Constants.GIT_DEFAULT_BRANCH)
        return Constants.GIT_DEFAULT_BRANCH

    def get_all_tags(self, directory: str) -> List[Commit]:
        result = self._run(directory, "for-each-ref", f"--format={_TAG_FORMAT}", "refs/tags")
        tags: List[Commit] = []
        for line in result.stdout.splitlines():
            fields = line.split("\t")
            if len(fields) != 5 or not fields[0]:
                continue
            name, object_id, peeled_id, object_time, peeled_time = fields
            # Annotated tags point at a tag object; use the peeled commit.
            if peeled_id:
                tags.append(Commit(id=peeled_id, commit_time=to_datetime(peeled_time), tag=name))
            else:
                tags.append(Commit(id=object_id, commit_time=to_datetime(object_time), tag=name))
        return tags

    def get_remote_url(self, directory: str) -> str:
        return self._run(directory, "remote", "get-url", self.remote).stdout.strip()
