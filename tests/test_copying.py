from __future__ import annotations

from pathlib import Path

import pytest

from gemstamp.copying import (
    DirectorySnapshot,
    copy_template,
    enumerate_template,
    looks_like_generated_package,
    should_skip,
)


def _snapshot(name: str, entries=(), lib_entries=()) -> DirectorySnapshot:
    return DirectorySnapshot(name=name, entries=frozenset(entries), lib_entries=frozenset(lib_entries))


@pytest.mark.parametrize(
    "snapshot",
    [
        _snapshot("some_gem", ["some_gem.gemspec"]),
        _snapshot("lib", ["other.gemspec"]),
        _snapshot("my_gem", ["lib"], ["my_gem"]),
        _snapshot("my_gem", ["lib"], ["my_gem.rb"]),
    ],
)
def test_generated_packages_are_recognised(snapshot: DirectorySnapshot):
    assert looks_like_generated_package(snapshot)


@pytest.mark.parametrize(
    "snapshot",
    [
        _snapshot("lib", ["gemstamp.gemspec"]),
        _snapshot("docs", ["guide.md"]),
        _snapshot("lib", ["lib"], ["lib.rb"]),
        _snapshot("spec", ["spec"], ["spec"]),
        _snapshot("tools", ["gemstamp.gemspec"]),
    ],
)
def test_template_scaffolding_is_not_mistaken_for_a_package(snapshot: DirectorySnapshot):
    assert not looks_like_generated_package(snapshot)


def test_capture_reads_directory_and_library(tmp_path: Path):
    package = tmp_path / "my_gem"
    (package / "lib").mkdir(parents=True)
    (package / "lib" / "my_gem.rb").write_text("", encoding="utf-8")
    (package / "README.md").write_text("", encoding="utf-8")

    snapshot = DirectorySnapshot.capture(package)
    assert snapshot.name == "my_gem"
    assert snapshot.entries == frozenset({"lib", "README.md"})
    assert snapshot.lib_entries == frozenset({"my_gem.rb"})


@pytest.mark.parametrize("name", [".", "..", "bin", "coverage"])
def test_reserved_names_are_skipped(tmp_path: Path, name: str):
    assert should_skip(name, tmp_path, tmp_path / "target", cwd=tmp_path)


@pytest.mark.parametrize("name", [".gitignore", "README.md"])
def test_regular_files_are_kept(template_dir: Path, tmp_path: Path, name: str):
    assert not should_skip(name, template_dir, tmp_path / "target", cwd=tmp_path)


def test_nested_generated_gem_is_skipped(template_dir: Path, tmp_path: Path):
    assert should_skip("old_gem", template_dir, tmp_path / "target", cwd=tmp_path)


def test_self_reference_guard_only_applies_to_current_directory(tmp_path: Path):
    source = tmp_path / "template"
    target = source / "fresh"
    target.mkdir(parents=True)

    assert should_skip("fresh", source, target, cwd=target)
    assert not should_skip("fresh", source, target, cwd=tmp_path)


def test_enumerate_happens_before_target_creation(template_dir: Path, tmp_path: Path):
    target = template_dir / "nested-gem"
    copy_template(template_dir, target, cwd=tmp_path)

    assert target.is_dir()
    assert not (target / "nested-gem").exists()


def test_enumerate_returns_sorted_selection(template_dir: Path, tmp_path: Path):
    names = [path.name for path in enumerate_template(template_dir, tmp_path / "t", cwd=tmp_path)]
    assert names == sorted(names)
    assert "bin" not in names
    assert "coverage" not in names
    assert "old_gem" not in names


def test_copy_template_skips_version_control_everywhere(template_dir: Path, tmp_path: Path):
    (template_dir / "docs" / ".git").mkdir()
    (template_dir / "docs" / ".git" / "config").write_text("[core]\n", encoding="utf-8")
    target = tmp_path / "out"

    copied = copy_template(template_dir, target, cwd=tmp_path)

    assert not (target / ".git").exists()
    assert not (target / "docs" / ".git").exists()
    assert (target / "docs" / "guide.md").is_file()
    assert target / ".git" not in copied


def test_copy_template_preserves_bytes(template_dir: Path, tmp_path: Path):
    target = tmp_path / "out"
    copy_template(template_dir, target, cwd=tmp_path)

    for relative in ("data.bin", "logo.png", "lib/gemstamp.rb", "empty.txt"):
        assert (target / relative).read_bytes() == (template_dir / relative).read_bytes()


def test_copy_template_into_existing_directory(template_dir: Path, tmp_path: Path):
    target = tmp_path / "existing"
    target.mkdir()
    (target / "README.md").write_text("mine", encoding="utf-8")

    copy_template(template_dir, target, cwd=target)

    assert (target / "gemstamp.gemspec").is_file()
