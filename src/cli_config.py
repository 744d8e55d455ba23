"""CLI configuration overrides for runtime tunables.

Loads the YAML config first, then applies CLI values with highest
precedence, keeping the entrypoint slim.
"""

from __future__ import annotations

import logging

from constants import Constants, _load_yaml_config

logger = logging.getLogger(__name__)


def apply_cli_overrides(args) -> None:
    """Load configuration and apply CLI overrides onto Constants.

    Raises:
        OSError, ValueError, yaml.YAMLError: when an existing config file cannot be read.
    """
    loaded = _load_yaml_config(getattr(args, "CONFIG", None))
    if getattr(args, "CONFIG", None) and loaded is None:
        logger.warning("Config file %s not found, using defaults.", args.CONFIG)

    if getattr(args, "GIT_COMMAND", None):
        Constants.GIT_COMMAND = args.GIT_COMMAND
    if getattr(args, "HG_COMMAND", None):
        Constants.HG_COMMAND = args.HG_COMMAND
    if getattr(args, "COMMAND_TIMEOUT", None) is not None:
        Constants.COMMAND_TIMEOUT_SEC = int(args.COMMAND_TIMEOUT)
    if getattr(args, "CACHE_DIR", None):
        Constants.CACHE_DIR = args.CACHE_DIR
    if getattr(args, "LOG_LEVEL", None):
        Constants.LOG_LEVEL = str(args.LOG_LEVEL).upper()
