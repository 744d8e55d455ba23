"""Shared fixtures: an in-memory accessor standing in for git/hg."""

from datetime import datetime, timezone

import pytest

from constants import VcsType
from vcs.accessors.base import VcsAccessor
from vcs.errors import AccessorError
from vcs.models import Commit


def make_commit(commit_id, tag=None, ts=1500000000):
    return Commit(id=commit_id, commit_time=datetime.fromtimestamp(ts, tz=timezone.utc), tag=tag)


class FakeAccessor(VcsAccessor):
    """Records every call and answers from dictionaries."""

    metadata_dir = ".git"

    def __init__(self, commits=(), tags=(), branches=None, default_branch="master",
                 remote_url="https://example.com/repo.git", failing_urls=None, present=False):
        self.commits = {c.id: c for c in commits}
        for t in tags:
            self.commits.setdefault(t.id, t)
        self.tags = list(tags)
        self.branches = dict(branches or {})
        for c in self.branches.values():
            self.commits.setdefault(c.id, c)
        self.default_branch = default_branch
        self.remote_url = remote_url
        self.failing_urls = dict(failing_urls or {})
        self.present = present
        self.checked_out = None
        self.calls = []

    @property
    def vcs_type(self):
        return VcsType.GIT

    def names(self):
        return [c[0] for c in self.calls]

    def is_repository(self, directory):
        return self.present

    def clone(self, url, directory):
        self.calls.append(("clone", url))
        if url in self.failing_urls:
            raise self.failing_urls[url]
        self.present = True

    def update(self, directory):
        self.calls.append(("update", directory))

    def checkout(self, directory, commit_id):
        self.calls.append(("checkout", commit_id))
        if commit_id not in self.commits:
            raise AccessorError(["checkout", commit_id], 1, "unknown revision")
        self.checked_out = commit_id

    def find_commit(self, directory, commit_id):
        self.calls.append(("find_commit", commit_id))
        return self.commits.get(commit_id)

    def find_commit_by_tag_or_branch(self, directory, name):
        self.calls.append(("find_commit_by_tag_or_branch", name))
        for t in self.tags:
            if t.tag == name:
                return t
        return self.branches.get(name)

    def head_commit_of_branch(self, directory, branch):
        self.calls.append(("head_commit_of_branch", branch))
        if branch not in self.branches:
            raise AccessorError(["show", branch], None, f"branch {branch} not found")
        return self.branches[branch]

    def get_default_branch(self, directory):
        self.calls.append(("get_default_branch", directory))
        return self.default_branch

    def get_all_tags(self, directory):
        self.calls.append(("get_all_tags", directory))
        return list(self.tags)

    def get_remote_url(self, directory):
        self.calls.append(("get_remote_url", directory))
        return self.remote_url


@pytest.fixture
def tagged_accessor():
    """Repository with three version tags, a non-version tag and two branches."""
    return FakeAccessor(
        tags=[
            make_commit("a100", tag="v1.0.0"),
            make_commit("a120", tag="v1.2.0"),
            make_commit("a110", tag="v1.1.0"),
            make_commit("b200", tag="v2.0.0"),
            make_commit("c000", tag="nightly"),
        ],
        branches={
            "master": make_commit("ffff"),
            "develop": make_commit("dddd"),
        },
        present=True,
    )
