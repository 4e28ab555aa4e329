"""Text detection and identifier substitution for generated files.

Substitutions are modelled as an ordered tuple of :class:`Substitution` pairs.
Order is significant: the tool's own ``require_relative`` lines are removed
while they still carry the template name, and the literal table rewrites the
module name before the quoted and path forms are considered.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator

from .config import GemIdentity
from .layout import DEFAULT_LAYOUT, TemplateLayout

__all__ = [
    "SNIFF_SIZE",
    "Substitution",
    "apply_rules",
    "build_rules",
    "decode_text",
    "is_text_file",
    "iter_files",
    "transform_file",
]


LOGGER = logging.getLogger(__name__)

SNIFF_SIZE = 512


@dataclass(slots=True, frozen=True)
class Substitution:
    """A matcher and the text that replaces every match.

    String matchers are replaced literally; compiled patterns are substituted
    with :attr:`replacement` taken verbatim (no group references).
    """

    matcher: str | re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        if isinstance(self.matcher, str):
            return text.replace(self.matcher, self.replacement)
        return self.matcher.sub(lambda _match: self.replacement, text)


def is_text_file(path: str | Path, layout: TemplateLayout = DEFAULT_LAYOUT) -> bool:
    """Return ``True`` when ``path`` should receive content substitution.

    Known binary extensions, unreadable files, empty files and files with a
    NUL byte in their first :data:`SNIFF_SIZE` bytes are all non-text.
    """

    path = Path(path)
    if path.name.endswith(layout.binary_suffixes):
        return False

    try:
        with path.open("rb") as handle:
            chunk = handle.read(SNIFF_SIZE)
    except OSError:
        return False

    if not chunk:
        return False
    return b"\x00" not in chunk


def decode_text(data: bytes) -> str:
    """Decode ``data`` as UTF-8, replacing invalid sequences instead of failing."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def _tool_require_removals(layout: TemplateLayout) -> tuple[Substitution, ...]:
    return tuple(
        Substitution(
            re.compile(rf"require_relative '{re.escape(layout.name)}/{re.escape(module)}'\n"),
            "",
        )
        for module in layout.tool_modules
    )


def build_rules(
    identity: GemIdentity,
    layout: TemplateLayout = DEFAULT_LAYOUT,
    *,
    year: int | None = None,
) -> tuple[Substitution, ...]:
    """Return the ordered substitutions turning template text into ``identity``'s gem."""

    name = layout.name
    raw = identity.raw_name
    safe = identity.path_safe_name
    year = year or date.today().year

    literals = (
        Substitution(layout.symbol_name, identity.symbol_name),
        Substitution(f"require_relative 'lib/{name}/", f"require_relative 'lib/{safe}/"),
        Substitution(f"require_relative '{name}/", f"require_relative '{safe}/"),
        Substitution(f"require '{name}'", f"require '{safe}'"),
        Substitution(f"spec.name          = '{name}'", f"spec.name          = '{raw}'"),
        Substitution(f"'{name}'", f"'{raw}'"),
        Substitution(f'"{name}"', f'"{raw}"'),
        Substitution(layout.repository, f"yourusername/{raw}"),
    )

    placeholders = (
        Substitution(
            re.compile(r"spec\.summary\s*=.*"),
            "spec.summary       = 'Write a short summary for your gem'",
        ),
        Substitution(
            re.compile(r"spec\.description\s*=.*"),
            "spec.description   = 'Write a longer description for your gem'",
        ),
        Substitution(re.compile(r"spec\.authors\s*=.*"), "spec.authors       = ['Your Name']"),
        Substitution(
            re.compile(r"spec\.email\s*=.*"), "spec.email         = ['your.email@example.com']"
        ),
        Substitution(
            re.compile(r"spec\.executables\s*=.*"),
            "spec.executables   = spec.files.grep(%r{^bin/}) { |f| File.basename(f) }",
        ),
        Substitution(re.compile(r"Copyright \(c\) \d+ .+"), f"Copyright (c) {year} Your Name"),
    )

    return _tool_require_removals(layout) + literals + placeholders


def apply_rules(text: str, rules: Iterable[Substitution]) -> str:
    """Apply ``rules`` in order; a rule that fails on encoding is skipped."""

    for rule in rules:
        try:
            text = rule.apply(text)
        except UnicodeError as exc:
            LOGGER.debug("Skipping substitution for %r: %s", rule.matcher, exc)
    return text


def transform_file(path: Path, rules: Iterable[Substitution], *, quiet: bool = False) -> bool:
    """Rewrite ``path`` in place. Returns ``False`` when the file was skipped."""

    try:
        original = decode_text(path.read_bytes())
        rewritten = apply_rules(original, rules)
        if rewritten != original:
            path.write_bytes(rewritten.encode("utf-8"))
    except UnicodeError as exc:
        if not quiet:
            LOGGER.warning("Skipping file with encoding issues: %s (%s)", path, exc)
        return False
    return True


def iter_files(root: Path, layout: TemplateLayout = DEFAULT_LAYOUT) -> Iterator[Path]:
    """Yield every file below ``root`` in a stable order, dotfiles included.

    Version control directories are not descended into.
    """

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name != layout.vcs_dir)
        for filename in sorted(filenames):
            yield Path(dirpath) / filename
