"""Tests for the subprocess helper."""

import logging
import subprocess
from unittest.mock import patch

import pytest

from common.process import run_command
from constants import Constants
from vcs.errors import AccessorError


def test_success_returns_completed_process():
    completed = subprocess.CompletedProcess(args=["git"], returncode=0, stdout="ok\n", stderr="")
    with patch("common.process.subprocess.run", return_value=completed) as mock_run:
        result = run_command(["git", "status"], cwd="/w", context="git")
    assert result.stdout == "ok\n"
    kwargs = mock_run.call_args.kwargs
    assert mock_run.call_args.args[0] == ["git", "status"]
    assert kwargs["cwd"] == "/w"
    assert kwargs["capture_output"] is True
    assert kwargs["text"] is True
    assert kwargs["check"] is False


def test_nonzero_exit_raises_with_stderr():
    completed = subprocess.CompletedProcess(args=["git"], returncode=128, stdout="", stderr="fatal: nope\n")
    with patch("common.process.subprocess.run", return_value=completed):
        with pytest.raises(AccessorError) as exc_info:
            run_command(["git", "clone", "x"], context="git")
    assert exc_info.value.returncode == 128
    assert exc_info.value.stderr == "fatal: nope"
    assert exc_info.value.command == ["git", "clone", "x"]


def test_nonzero_exit_without_check():
    completed = subprocess.CompletedProcess(args=["git"], returncode=1, stdout="", stderr="")
    with patch("common.process.subprocess.run", return_value=completed):
        assert run_command(["git", "show"], context="git", check=False).returncode == 1


def test_missing_binary():
    with patch("common.process.subprocess.run", side_effect=FileNotFoundError("hg")):
        with pytest.raises(AccessorError) as exc_info:
            run_command(["hg", "pull"], context="hg")
    assert "hg executable not found" in str(exc_info.value)


def test_timeout(monkeypatch):
    monkeypatch.setattr(Constants, "COMMAND_TIMEOUT_SEC", 5)
    with patch("common.process.subprocess.run", side_effect=subprocess.TimeoutExpired(["git"], 5)) as mock_run:
        with pytest.raises(AccessorError) as exc_info:
            run_command(["git", "fetch"], context="git")
    assert mock_run.call_args.kwargs["timeout"] == 5
    assert "timed out" in str(exc_info.value)


def test_debug_trace(caplog):
    completed = subprocess.CompletedProcess(args=["git"], returncode=0, stdout="", stderr="")
    with patch("common.process.subprocess.run", return_value=completed):
        with caplog.at_level(logging.DEBUG, logger="common.process"):
            run_command(["git", "fetch", "origin"], context="git")
    record = next(r for r in caplog.records if r.getMessage() == "VCS command finished")
    assert record.event == "vcs_command"
    assert record.outcome == "success"
    assert record.action == "git fetch"
