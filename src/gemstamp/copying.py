"""Enumerate a template tree and copy it into a target directory."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from .layout import DEFAULT_LAYOUT, TemplateLayout

__all__ = [
    "DirectorySnapshot",
    "copy_template",
    "enumerate_template",
    "looks_like_generated_package",
    "should_skip",
]


LOGGER = logging.getLogger(__name__)

_TRAVERSAL_ENTRIES = frozenset({".", ".."})


@dataclass(slots=True, frozen=True)
class DirectorySnapshot:
    """Names found directly inside a directory and inside its library folder."""

    name: str
    entries: frozenset[str]
    lib_entries: frozenset[str] = frozenset()

    @classmethod
    def capture(cls, path: Path, layout: TemplateLayout = DEFAULT_LAYOUT) -> "DirectorySnapshot":
        lib_path = path / layout.lib_dir
        lib_entries: frozenset[str] = frozenset()
        if lib_path.is_dir():
            lib_entries = frozenset(child.name for child in lib_path.iterdir())
        return cls(
            name=path.name,
            entries=frozenset(child.name for child in path.iterdir()),
            lib_entries=lib_entries,
        )

    def manifests(self, layout: TemplateLayout = DEFAULT_LAYOUT) -> frozenset[str]:
        return frozenset(
            entry
            for entry in self.entries
            if entry.endswith(layout.manifest_suffix) and not entry.startswith(".")
        )


def looks_like_generated_package(
    snapshot: DirectorySnapshot, layout: TemplateLayout = DEFAULT_LAYOUT
) -> bool:
    """Return ``True`` when ``snapshot`` resembles a gem rather than template scaffolding.

    A directory qualifies when it carries a manifest other than the template's
    own, or (outside the library and spec roots) when it carries a manifest,
    a library folder or a library entry point named after itself.
    """

    manifests = snapshot.manifests(layout)
    if manifests and layout.manifest_name not in manifests:
        return True

    if snapshot.name in (layout.lib_dir, layout.spec_dir):
        return False

    return (
        layout.manifest_for(snapshot.name) in snapshot.entries
        or snapshot.name in snapshot.lib_entries
        or layout.source_for(snapshot.name) in snapshot.lib_entries
    )


def should_skip(
    name: str,
    source_root: Path,
    target_path: Path,
    *,
    cwd: Path,
    layout: TemplateLayout = DEFAULT_LAYOUT,
) -> bool:
    """Decide whether the template child ``name`` is left out of the copy."""

    if name in _TRAVERSAL_ENTRIES or name in (layout.executables_dir, layout.coverage_dir):
        return True

    entry = source_root / name
    target = target_path.resolve()
    # Never copy the directory the gem is being created in into itself.
    if target == cwd.resolve() and entry.resolve() == target:
        return True

    if entry.is_dir():
        return looks_like_generated_package(DirectorySnapshot.capture(entry, layout), layout)

    return False


def enumerate_template(
    source_root: Path,
    target_path: Path,
    *,
    cwd: Path,
    layout: TemplateLayout = DEFAULT_LAYOUT,
) -> list[Path]:
    """Return the template children to copy, in name order.

    Must run before ``target_path`` is created so a target nested inside the
    template is never picked up as a child.
    """

    selected: list[Path] = []
    for child in sorted(source_root.iterdir(), key=lambda path: path.name):
        if should_skip(child.name, source_root, target_path, cwd=cwd, layout=layout):
            LOGGER.debug("Skipping template entry %s", child)
            continue
        selected.append(child)
    return selected


def _copy_directory(source: Path, destination: Path, layout: TemplateLayout) -> None:
    shutil.copytree(
        source,
        destination,
        ignore=shutil.ignore_patterns(layout.vcs_dir),
        copy_function=shutil.copy,
        dirs_exist_ok=True,
    )


def copy_template(
    source_root: str | Path,
    target_path: str | Path,
    *,
    cwd: str | Path | None = None,
    layout: TemplateLayout = DEFAULT_LAYOUT,
) -> list[Path]:
    """Copy every selected child of ``source_root`` into ``target_path``.

    Returns the destination path of each copied child.
    """

    source_root = Path(source_root)
    target_path = Path(target_path)
    working_dir = Path(cwd) if cwd is not None else Path.cwd()

    children = enumerate_template(source_root, target_path, cwd=working_dir, layout=layout)
    target_path.mkdir(parents=True, exist_ok=True)

    copied: list[Path] = []
    for child in children:
        destination = target_path / child.name
        if child.is_dir():
            if child.name == layout.vcs_dir:
                continue
            _copy_directory(child, destination, layout)
        else:
            shutil.copy(child, destination)
        copied.append(destination)
    LOGGER.debug("Copied %d template entries into %s", len(copied), target_path)
    return copied
