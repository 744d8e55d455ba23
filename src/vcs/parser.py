"""Token parsing utilities for VCS dependency requests."""

from typing import Optional, Sequence, Tuple

from constants import VcsType
from .errors import ConfigurationError
from .models import ByBranch, ByCommit, ByTag, Latest, NotationDependency, VersionSelector

_PREFIXES = {
    "commit": ByCommit,
    "tag": ByTag,
    "branch": ByBranch,
}


def split_name_and_selector(s: str) -> Tuple[str, Optional[str]]:
    """Return (name, selector text or None), split on the first '@' after the first '/'.

    An '@' in the user part of an scp-style name (git@host:path) is not a
    separator; branch names after the separator may contain '/' and '@', so
    the first such '@' wins, not the rightmost.
    """
    s = s.strip()
    slash = s.find('/')
    idx = s.find('@', slash + 1 if slash != -1 else 0)
    if idx == -1:
        return s, None
    name = s[:idx].strip()
    selector = s[idx + 1:].strip()
    return name, (selector if selector else None)


def parse_selector(text: Optional[str]) -> VersionSelector:
    """Parse selector text into a VersionSelector.

    ``None``/``latest`` -> Latest; ``commit:``, ``tag:``, ``branch:`` prefixes
    select explicitly; anything else is a tag name or version range.
    """
    if text is None or text.strip().lower() in ("", "latest"):
        return Latest()
    kind, sep, value = text.partition(":")
    if sep and kind.lower() in _PREFIXES:
        return _PREFIXES[kind.lower()](value.strip())
    return ByTag(text.strip())


def default_urls(name: str) -> Tuple[str, ...]:
    """Candidate clone URLs for an import-path-like name."""
    if "://" in name:
        return (name,)
    return (f"https://{name}",)


def parse_cli_token(
    token: str,
    vcs_type: VcsType = VcsType.GIT,
    urls: Optional[Sequence[str]] = None,
) -> NotationDependency:
    """Parse a CLI token into a NotationDependency.

    Raises:
        ConfigurationError: when the token has no name.
    """
    name, selector_text = split_name_and_selector(token)
    if not name:
        raise ConfigurationError(f"Missing dependency name in '{token}'")
    selector = parse_selector(selector_text)
    candidate_urls = tuple(u.strip() for u in (urls or ()) if u and u.strip()) or default_urls(name)
    return NotationDependency(name=name, selector=selector, urls=candidate_urls, vcs_type=vcs_type)
