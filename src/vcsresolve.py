"""vcsresolve: resolve a VCS source dependency to a pinned commit.

Clones or refreshes the dependency's working copy in the cache, resolves the
requested notation, checks the commit out and prints the resolved record.
"""

import json
import logging
import sys

import yaml

from args import parse_args
from cli_config import apply_cli_overrides
from common.logging_utils import configure_logging, extra_context, is_debug_enabled, redact_credentials, safe_url
from constants import Constants, ExitCodes, VcsType
from vcs.cache import RepositoryCache
from vcs.context import FlatResolveContext
from vcs.errors import (
    AccessorError,
    CannotCloneRepositoryError,
    ConfigurationError,
    DependencyResolutionError,
)
from vcs.manager import create_manager
from vcs.parser import parse_cli_token

logger = logging.getLogger(__name__)


def export_json(resolved, path=None):
    """Writes the resolved dependency as JSON.

    Args:
        resolved (ResolvedDependency): Resolved dependency.
        path (str): File path to export the JSON, stdout when None.
    """
    data = resolved.to_dict()
    if path is None:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=4)
        sys.stdout.write("\n")
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def resolve_dependency(dependency, cache):
    """Resolve one dependency while holding its working-copy lock."""
    manager = create_manager(dependency.vcs_type)
    repo_dir = cache.repo_dir(dependency)
    with cache.lock(repo_dir):
        return manager.resolve(dependency, FlatResolveContext(), repo_dir)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)

    try:
        apply_cli_overrides(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.error("Config file couldn't be loaded: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    configure_logging(args.LOG_LEVEL)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        dependency = parse_cli_token(args.PACKAGE, VcsType(args.VCS_TYPE), args.URLS)
    except ConfigurationError as e:
        logging.error("Invalid dependency notation: %s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    cache = RepositoryCache(Constants.CACHE_DIR)
    try:
        resolved = resolve_dependency(dependency, cache)
    except CannotCloneRepositoryError as e:
        for attempt in e.attempts:
            logging.debug("Cloning with url %s failed, the cause is %s", safe_url(attempt.url), redact_credentials(str(attempt.cause)))
        logging.error("%s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    except ConfigurationError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    except (DependencyResolutionError, AccessorError) as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.RESOLUTION_ERROR.value)

    logging.info("Resolved %s to %s", dependency, resolved.commit_id)
    export_json(resolved, args.OUTPUT)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
