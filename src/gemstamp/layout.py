"""Description of the template tree that gems are stamped from."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .naming import symbol_name


class TemplateLayout(BaseModel):
    """Names and conventions the materializer relies on when reading a template.

    The defaults describe the skeleton bundled with the package. Every path is
    relative to the template (or target) root and uses forward slashes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field("gemstamp", description="Identifier the template uses for itself.")
    repository: str = Field(
        "gemstamp/gemstamp", description="Repository slug referenced by the template's links."
    )
    manifest_suffix: str = Field(".gemspec", description="Extension of the package manifest file.")
    source_suffix: str = Field(".rb", description="Extension of source files.")
    archive_suffix: str = Field(".gem", description="Extension of built package archives.")
    lib_dir: str = Field("lib", description="Directory holding library sources.")
    spec_dir: str = Field("spec", description="Directory holding the test suite.")
    executables_dir: str = Field("bin", description="Directory of the template's own executables.")
    coverage_dir: str = Field("coverage", description="Directory of generated coverage reports.")
    vcs_dir: str = Field(".git", description="Version control directory never copied.")
    tool_modules: tuple[str, ...] = Field(
        ("cli", "generator"),
        description="Modules implementing the scaffolding tool itself, removed from generated gems.",
    )
    binary_suffixes: tuple[str, ...] = Field(
        (".png", ".jpg", ".jpeg", ".gif", ".ico", ".zip", ".tar", ".gz"),
        description="File extensions always treated as binary.",
    )
    cleanup_paths: tuple[str, ...] = Field(
        (
            ".claude",
            "CLAUDE.md",
            ".DS_Store",
            "lib/.DS_Store",
            "lib/{path_safe_name}/.DS_Store",
            "spec/.DS_Store",
            "Gemfile.lock",
            ".ruby-version",
            ".qlty",
            "coverage",
        ),
        description="Development artifacts deleted from the target. ``{path_safe_name}`` is expanded.",
    )

    @property
    def symbol_name(self) -> str:
        """Module name the template's sources declare."""

        return symbol_name(self.name)

    @property
    def manifest_name(self) -> str:
        """File name of the template's own manifest."""

        return self.manifest_for(self.name)

    def manifest_for(self, name: str) -> str:
        return f"{name}{self.manifest_suffix}"

    def source_for(self, name: str) -> str:
        return f"{name}{self.source_suffix}"

    def spec_file_for(self, name: str) -> str:
        return f"{name}_spec{self.source_suffix}"

    def expand_cleanup_paths(self, path_safe_name: str) -> tuple[str, ...]:
        """Return :attr:`cleanup_paths` with placeholders filled in."""

        return tuple(path.format(path_safe_name=path_safe_name) for path in self.cleanup_paths)


DEFAULT_LAYOUT = TemplateLayout()


__all__ = ["DEFAULT_LAYOUT", "TemplateLayout"]
