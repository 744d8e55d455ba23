"""Mercurial accessor driving the hg command line."""

from __future__ import annotations

import re
from typing import List, Optional

from constants import Constants, VcsType
from common.process import run_command
from ..errors import AccessorError
from ..models import Commit
from .base import VcsAccessor, to_datetime

_NODE_ID = re.compile(r"^[0-9a-fA-F]{4,40}$")
_LOG_TEMPLATE = "{node}\\t{date|hgdate}\\n"
_TAGS_TEMPLATE = "{node}\\t{date|hgdate}\\t{join(tags, '\\t')}\\n"


def _literal(name: str) -> Optional[str]:
    """Quote a name for a revset, or None if it cannot be quoted safely."""
    if not name or '"' in name or "\\" in name:
        return None
    return f'"literal:{name}"'


def _epoch(hgdate: str) -> str:
    # hgdate is "<unix seconds> <tz offset>"
    return hgdate.split(" ", 1)[0]


class MercurialAccessor(VcsAccessor):
    """Accessor for Mercurial repositories."""

    metadata_dir = ".hg"

    def __init__(self, hg_command: Optional[str] = None):
        self.hg_command = hg_command or Constants.HG_COMMAND

    @property
    def vcs_type(self) -> VcsType:
        return VcsType.MERCURIAL

    def _run(self, directory: str, *args: str, check: bool = True):
        return run_command([self.hg_command, *args], cwd=directory, context="hg", check=check)

    def _log(self, directory: str, revset: str, tag: Optional[str] = None) -> Optional[Commit]:
        result = self._run(directory, "log", "--rev", revset, "--template", _LOG_TEMPLATE, check=False)
        if result.returncode != 0 or not result.stdout.strip():
            return None
        node, _, hgdate = result.stdout.strip().splitlines()[0].partition("\t")
        return Commit(id=node, commit_time=to_datetime(_epoch(hgdate)), tag=tag)

    def clone(self, url: str, directory: str) -> None:
        self._run(directory, "clone", url, ".")

    def update(self, directory: str) -> None:
        self._run(directory, "pull")

    def checkout(self, directory: str, commit_id: str) -> None:
        self._run(directory, "update", "--clean", "--rev", commit_id)

    def find_commit(self, directory: str, commit_id: str) -> Optional[Commit]:
        if not commit_id or not _NODE_ID.match(commit_id):
            return None
        # bare digits would be read as a local revision number
        return self._log(directory, f'id("{commit_id.lower()}")')

    def find_commit_by_tag_or_branch(self, directory: str, name: str) -> Optional[Commit]:
        quoted = _literal(name)
        if quoted is None or name == "tip":
            return None
        commit = self._log(directory, f"tag({quoted})", tag=name)
        if commit is not None:
            return commit
        return self._log(directory, f"max(branch({quoted}))")

    def head_commit_of_branch(self, directory: str, branch: str) -> Commit:
        quoted = _literal(branch)
        commit = self._log(directory, f"max(branch({quoted}))") if quoted else None
        if commit is None:
            raise AccessorError([self.hg_command, "log", branch], None, f"branch {branch} not found")
        return commit

    def get_default_branch(self, directory: str) -> str:
        return Constants.HG_DEFAULT_BRANCH

    def get_all_tags(self, directory: str) -> List[Commit]:
        result = self._run(directory, "log", "--rev", "tag()", "--template", _TAGS_TEMPLATE)
        tags: List[Commit] = []
        for line in result.stdout.splitlines():
            fields = line.split("\t")
            if len(fields) < 3:
                continue
            node, hgdate, names = fields[0], fields[1], fields[2:]
            for name in names:
                if name and name != "tip":
                    tags.append(Commit(id=node, commit_time=to_datetime(_epoch(hgdate)), tag=name))
        return tags

    def get_remote_url(self, directory: str) -> str:
        return self._run(directory, "paths", "default").stdout.strip()
