"""Argument parsing functionality for vcsresolve."""

import argparse
from constants import Constants, VcsType


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="vcsresolve",
        description=(
            "vcsresolve - Resolve a VCS source dependency to a pinned commit"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--package",
                        dest="PACKAGE",
                        help="Dependency notation: name[@latest|@commit:ID|@tag:EXPR|@branch:NAME|@EXPR]",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-u", "--url",
                        dest="URLS",
                        help="Candidate clone URL, tried in order (can be used multiple times)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-t", "--type",
                        dest="VCS_TYPE",
                        help="Version control system, i.e: git, hg",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_VCS,
                        default=VcsType.GIT.value)
    parser.add_argument("--cache-dir",
                        dest="CACHE_DIR",
                        help="Directory holding cached working copies",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output JSON file (default: stdout)",
                        action="store",
                        type=str)
    parser.add_argument("--git",
                        dest="GIT_COMMAND",
                        help="git executable to use",
                        action="store",
                        type=str)
    parser.add_argument("--hg",
                        dest="HG_COMMAND",
                        help="hg executable to use",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="COMMAND_TIMEOUT",
                        help="Timeout in seconds for each VCS command",
                        action="store",
                        type=int)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
