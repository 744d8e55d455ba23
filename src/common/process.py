"""Subprocess helper used by the VCS accessors.

Runs one command, emits DEBUG traces with timing, and turns every failure
mode (non-zero exit, missing binary, timeout) into an AccessorError.
"""
from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from vcs.errors import AccessorError

logger = logging.getLogger(__name__)


def run_command(
    args: Sequence[str],
    *,
    cwd: Optional[str] = None,
    context: str,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run a command and capture its text output.

    Args:
        args: Command and arguments, never passed through a shell.
        cwd: Working directory.
        context: Short tag for logs (e.g., "git", "hg").
        check: Raise AccessorError on a non-zero exit code.

    Returns:
        subprocess.CompletedProcess with stdout/stderr as text.
    """
    cmd = list(args)
    with Timer() as t:
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=Constants.COMMAND_TIMEOUT_SEC,
                check=False,
            )
        except FileNotFoundError as exc:
            raise AccessorError(cmd, None, f"{cmd[0]} executable not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise AccessorError(cmd, None, f"timed out after {Constants.COMMAND_TIMEOUT_SEC} seconds") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "VCS command finished",
            extra=extra_context(
                event="vcs_command",
                component="process",
                action=" ".join(cmd[:2]),
                outcome="success" if result.returncode == 0 else "failure",
                returncode=result.returncode,
                duration_ms=t.duration_ms(),
                context=context,
            ),
        )

    if check and result.returncode != 0:
        raise AccessorError(cmd, result.returncode, result.stderr)
    return result
