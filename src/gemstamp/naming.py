"""Identifier transformations applied to gem names."""

from __future__ import annotations

import re

__all__ = ["path_safe_name", "split_segments", "symbol_name"]


_SEGMENT_SEPARATORS = re.compile(r"[-_]")


def split_segments(name: str) -> list[str]:
    """Split ``name`` on every hyphen and underscore."""

    return _SEGMENT_SEPARATORS.split(name)


def symbol_name(name: str) -> str:
    """Return the module name Ruby code uses for the gem called ``name``.

    Each hyphen or underscore delimited segment gets its first character
    upper-cased and the segments are joined without a separator. The
    remainder of a segment keeps its case, so ``MyAwesome-gem_name`` becomes
    ``MyAwesomeGemName``.
    """

    return "".join(part[:1].upper() + part[1:] for part in split_segments(name))


def path_safe_name(name: str) -> str:
    """Return ``name`` with hyphens replaced by underscores."""

    return name.replace("-", "_")
