"""Stamp out new Ruby gems from a template tree.

The package copies a template, renames the paths that embed the template's
own name and rewrites text files so they refer to the new gem. It can be used
programmatically through :class:`Materializer` or via the ``gemstamp`` command.
"""

from __future__ import annotations

from .config import GemIdentity, RuntimeSettings, template_root
from .layout import DEFAULT_LAYOUT, TemplateLayout
from .materializer import Materializer
from .naming import path_safe_name, symbol_name

__all__ = [
    "DEFAULT_LAYOUT",
    "GemIdentity",
    "Materializer",
    "RuntimeSettings",
    "TemplateLayout",
    "path_safe_name",
    "symbol_name",
    "template_root",
]

__version__ = "0.1.0"
