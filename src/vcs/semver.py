"""Semantic version helpers for tag matching.

Tags are parsed leniently (``v1.2.0``, ``1.2``) and range expressions use
npm semantics (``^1.0.0``, ``~1.2``, ``1.x``, ``>=1.0 <2.0``, ``a || b``).
"""
from __future__ import annotations

import functools
import logging
import re
from typing import Optional, Union

import semantic_version

logger = logging.getLogger(__name__)

_PARTIAL_VERSION = re.compile(r"^\d+(\.\d+)?$")
_SINGLE_PIPE = re.compile(r"(?<!\|)\|(?!\|)")

Spec = Union[semantic_version.NpmSpec, semantic_version.SimpleSpec]


def parse_tag_version(tag: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse a tag name into a Version, or None when it is not a version."""
    if not tag:
        return None
    text = tag.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    try:
        return semantic_version.Version(text)
    except ValueError:
        pass
    if _PARTIAL_VERSION.match(text):
        return semantic_version.Version.coerce(text)
    return None


def _normalize_expression(expression: str) -> str:
    """Accept '&' and single '|' as aliases for npm's ' ' and '||'."""
    s = expression.strip().replace("&", " ")
    s = _SINGLE_PIPE.sub("||", s)
    return re.sub(r"\s+", " ", s)


def _normalize_simple(expression: str) -> str:
    """Rewrite hyphen and x-ranges into SimpleSpec comparator pairs."""
    s = expression.strip()

    m = re.match(r'^\s*([0-9A-Za-z\.\-\+]+)\s+-\s+([0-9A-Za-z\.\-\+]+)\s*$', s)
    if m:
        return f">={m.group(1)},<={m.group(2)}"

    s2 = s.replace('*', 'x').lower()
    m = re.match(r'^\s*(\d+)\.(\d+)\.x\s*$', s2)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor}.0,<{major}.{minor + 1}.0"

    m = re.match(r'^\s*(\d+)(\.x)?\s*$', s2)
    if m:
        major = int(m.group(1))
        return f">={major}.0.0,<{major + 1}.0.0"

    return s


@functools.lru_cache(maxsize=256)
def build_spec(expression: str) -> Optional[Spec]:
    """Compile a range expression, or return None when it is not a valid range."""
    if not expression or not expression.strip():
        return None
    try:
        return semantic_version.NpmSpec(_normalize_expression(expression))
    except ValueError:
        pass
    try:
        return semantic_version.SimpleSpec(_normalize_simple(expression))
    except ValueError:
        logger.debug("Not a semantic version range: %s", expression)
        return None


def satisfies(version: Optional[semantic_version.Version], expression: str) -> bool:
    """Return True when version lies in the range described by expression."""
    if version is None:
        return False
    spec = build_spec(expression)
    if spec is None:
        return False
    return spec.match(version)
