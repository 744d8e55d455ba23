"""End-to-end resolution against real local Mercurial repositories."""

import os
import shutil
import subprocess

import pytest

from vcs.accessors import MercurialAccessor
from vcs.context import FlatResolveContext
from vcs.manager import VcsDependencyManager
from vcs.models import ByBranch, ByCommit, ByTag, Latest, NotationDependency

pytestmark = pytest.mark.skipif(shutil.which("hg") is None, reason="hg is not installed")

HG_ENV = {
    "HGUSER": "Test <test@example.com>",
    "HGPLAIN": "1",
    "HGRCPATH": "",
}


def hg(cwd, *args):
    env = dict(os.environ, **HG_ENV)
    result = subprocess.run(["hg", *args], cwd=cwd, env=env, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def node(repo, rev="."):
    return hg(repo, "log", "--rev", rev, "--template", "{node}")


def commit_file(repo, content):
    (repo / "file.txt").write_text(content, encoding="utf-8")
    hg(repo, "commit", "--addremove", "-m", content)
    return node(repo)


@pytest.fixture
def hg_env(monkeypatch):
    for key, value in HG_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def upstream(tmp_path, hg_env):
    repo = tmp_path / "upstream"
    repo.mkdir()
    hg(repo, "init")
    ids = {}
    ids["v1.0.0"] = commit_file(repo, "one")
    hg(repo, "tag", "--rev", ids["v1.0.0"], "v1.0.0")
    ids["v1.1.0"] = commit_file(repo, "two")
    hg(repo, "tag", "--rev", ids["v1.1.0"], "v1.1.0")
    ids["default"] = node(repo)
    hg(repo, "branch", "feature")
    ids["feature"] = commit_file(repo, "three")
    hg(repo, "update", "--rev", "default")
    return repo, ids


def dep(selector, urls):
    return NotationDependency(name="hg.example.com/upstream", selector=selector, urls=tuple(urls))


def test_resolve_each_selector(upstream, tmp_path):
    repo, ids = upstream
    work = str(tmp_path / "cache" / "upstream")
    manager = VcsDependencyManager(MercurialAccessor())
    url = str(repo)

    resolved = manager.resolve(dep(ByTag("^1.0.0"), [url]), FlatResolveContext(), work)
    assert resolved.commit_id == ids["v1.1.0"]
    assert node(work) == ids["v1.1.0"]

    assert manager.resolve(dep(ByTag("v1.0.0"), [url]), FlatResolveContext(), work).commit_id == ids["v1.0.0"]
    assert manager.resolve(dep(Latest(), [url]), FlatResolveContext(), work).commit_id == ids["default"]
    assert manager.resolve(dep(ByBranch("feature"), [url]), FlatResolveContext(), work).commit_id == ids["feature"]
    short = ids["v1.0.0"][:12]
    assert manager.resolve(dep(ByCommit(short), [url]), FlatResolveContext(), work).commit_id == ids["v1.0.0"]


def test_tags_exclude_tip(upstream, tmp_path):
    repo, ids = upstream
    tags = {c.tag: c.id for c in MercurialAccessor().get_all_tags(str(repo))}
    assert tags == {"v1.0.0": ids["v1.0.0"], "v1.1.0": ids["v1.1.0"]}


def test_digits_are_not_revision_numbers(tmp_path, hg_env):
    repo = tmp_path / "long"
    repo.mkdir()
    hg(repo, "init")
    hg(repo, "debugbuilddag", "+1010")
    by_revision = node(repo, "1005")

    commit = MercurialAccessor().find_commit(str(repo), "1005")
    assert commit is None or commit.id.startswith("1005")
