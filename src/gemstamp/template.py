"""Placeholder rendering for generated boilerplate files.

Placeholders are written ``{{ key }}`` or ``{{ key|filter }}``. The filters
turn a gem name into one of its derived forms, so a template can be filled
from the raw name alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from .naming import path_safe_name, symbol_name

__all__ = ["NAME_FILTERS", "TemplateRenderer", "TemplateRenderingError"]


_PLACEHOLDER = re.compile(r"{{\s*(?P<key>\w+)\s*(?:\|\s*(?P<filter>\w+)\s*)?}}")

NAME_FILTERS: Mapping[str, Callable[[str], str]] = {
    "symbol": symbol_name,
    "path_safe": path_safe_name,
}


class TemplateRenderingError(RuntimeError):
    """Raised when a placeholder names an unknown value or filter."""


@dataclass(slots=True)
class TemplateRenderer:
    """Fill placeholders from a flat mapping of strings."""

    filters: Mapping[str, Callable[[str], str]] = field(default_factory=lambda: dict(NAME_FILTERS))

    def render_string(self, template: str, context: Mapping[str, str]) -> str:
        """Return ``template`` with every placeholder replaced.

        Raises :class:`TemplateRenderingError` for a key missing from
        ``context`` or a filter the renderer does not know.
        """

        def substitute(match: re.Match[str]) -> str:
            key = match.group("key")
            if key not in context:
                raise TemplateRenderingError(f"missing value for '{key}'")

            value = context[key]
            filter_name = match.group("filter")
            if filter_name is None:
                return value

            name_filter = self.filters.get(filter_name)
            if name_filter is None:
                raise TemplateRenderingError(f"unknown filter '{filter_name}'")
            return name_filter(value)

        return _PLACEHOLDER.sub(substitute, template)

    def render_to_file(
        self,
        template: str,
        context: Mapping[str, str],
        target: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> Path:
        """Render ``template`` into ``target``, replacing any existing file."""

        target_path = Path(target)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(self.render_string(template, context), encoding=encoding)
        return target_path
