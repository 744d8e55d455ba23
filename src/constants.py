"""Constants used in the project."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 4
    CONFIG_ERROR = 5


class VcsType(Enum):
    """Version control systems supported by the program.

    Args:
        Enum (string): Version control systems supported by the program.
    """

    GIT = "git"
    MERCURIAL = "hg"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_VCS = [
        VcsType.GIT.value,
        VcsType.MERCURIAL.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL = "INFO"
    ENV_CONFIG = "VCSRESOLVE_CONFIG"
    ENV_LOG_LEVEL = "VCSRESOLVE_LOG_LEVEL"
    DEFAULT_CONFIG_PATH = os.path.join("~", ".config", "vcsresolve", "config.yml")

    # VCS command execution
    GIT_COMMAND = "git"
    HG_COMMAND = "hg"
    COMMAND_TIMEOUT_SEC: Optional[int] = None  # None blocks until the command exits
    GIT_REMOTE = "origin"
    GIT_DEFAULT_BRANCH = "master"
    HG_DEFAULT_BRANCH = "default"

    # Repository cache
    CACHE_DIR = os.path.join("~", ".cache", "vcsresolve")


def _config_path(explicit: Optional[str] = None) -> Optional[str]:
    """Return the first existing config path: explicit, env var, default."""
    for candidate in (explicit, os.environ.get(Constants.ENV_CONFIG), Constants.DEFAULT_CONFIG_PATH):
        if not candidate:
            continue
        path = os.path.expanduser(candidate)
        if os.path.isfile(path):
            return path
    return None


def _apply_config(cfg: Dict[str, Any]) -> None:
    """Copy recognized YAML keys onto Constants."""
    vcs_cfg = cfg.get("vcs") or {}
    if vcs_cfg.get("git_command"):
        Constants.GIT_COMMAND = str(vcs_cfg["git_command"])
    if vcs_cfg.get("hg_command"):
        Constants.HG_COMMAND = str(vcs_cfg["hg_command"])
    if vcs_cfg.get("command_timeout") is not None:
        Constants.COMMAND_TIMEOUT_SEC = int(vcs_cfg["command_timeout"])

    cache_cfg = cfg.get("cache") or {}
    if cache_cfg.get("dir"):
        Constants.CACHE_DIR = str(cache_cfg["dir"])

    log_cfg = cfg.get("logging") or {}
    if log_cfg.get("level"):
        Constants.LOG_LEVEL = str(log_cfg["level"]).upper()


def _load_yaml_config(path: Optional[str] = None) -> Optional[str]:
    """Load YAML configuration onto Constants.

    Looks for the file given explicitly, then VCSRESOLVE_CONFIG, then
    ~/.config/vcsresolve/config.yml. A missing file is not an error.

    Args:
        path: Optional explicit config path.

    Returns:
        The path that was loaded, or None when no file was found.
    """
    cfg_path = _config_path(path)
    if cfg_path is None:
        return None
    with open(cfg_path, "r", encoding="utf-8") as fh:
        cfg = yaml.safe_load(fh) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {cfg_path} must contain a mapping")
    _apply_config(cfg)
    logger.debug("Loaded configuration from %s", cfg_path)
    return cfg_path
