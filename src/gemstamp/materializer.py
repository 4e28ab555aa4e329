"""Stamp a new gem out of a template tree."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .config import GemIdentity, RuntimeSettings, template_root
from .copying import copy_template
from .layout import DEFAULT_LAYOUT, TemplateLayout
from .template import TemplateRenderer
from .transform import build_rules, is_text_file, iter_files, transform_file

__all__ = ["Materializer", "README_TEMPLATE"]


LOGGER = logging.getLogger(__name__)


README_TEMPLATE = """# {{ raw_name|symbol }}

Welcome to your new gem! Put your Ruby code in `lib/{{ raw_name|path_safe }}`. To experiment with that code, run `bin/console` for an interactive prompt.

## Installation

Add this line to your application's Gemfile:

```ruby
gem '{{ raw_name }}'
```

And then execute:

    $ bundle

Or install it yourself as:

    $ gem install {{ raw_name }}

## Usage

Describe how to use {{ raw_name|symbol }} here.

## Development

After checking out the repo, run `bin/setup` to install dependencies. Then, run `rake spec` to run the tests. You can also run `bin/console` for an interactive prompt.

To install this gem onto your local machine, run `bundle exec rake install`. To release a new version, update the version number in `version.rb`, and then run `bundle exec rake release`, which will create a git tag for the version, push git commits and tags, and push the `.gem` file to [rubygems.org](https://rubygems.org).

## Contributing

Bug reports and pull requests are welcome on GitHub at https://github.com/yourusername/{{ raw_name }}.

## License

The gem is available as open source under the terms of the [MIT License](https://opensource.org/licenses/MIT).
"""


def _move(source: Path, destination: Path) -> bool:
    if not source.exists() or source == destination:
        return False
    destination.parent.mkdir(parents=True, exist_ok=True)
    source.rename(destination)
    return True


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


class Materializer:
    """Copy, rename, clean and rewrite a template tree into a new gem.

    Parameters
    ----------
    target_path:
        Directory receiving the gem. It is created when missing.
    name:
        Gem name override. Defaults to the final segment of ``target_path``.
    source_root:
        Template tree to read. Defaults to ``settings.template_root`` and then
        to the skeleton bundled with the package.
    layout:
        Conventions of the template tree.
    settings:
        Runtime settings; read from the environment when omitted.
    """

    def __init__(
        self,
        target_path: str | Path,
        name: str | None = None,
        *,
        source_root: str | Path | None = None,
        layout: TemplateLayout | None = None,
        settings: RuntimeSettings | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.target_path = Path(target_path)
        self.settings = settings or RuntimeSettings.from_env()
        self.layout = layout or DEFAULT_LAYOUT
        self.identity = GemIdentity.from_name(name or self.target_path.name)
        self.source_root = Path(source_root or self.settings.template_root or template_root())
        self.renderer = renderer or TemplateRenderer()

    def create(self, *, cwd: str | Path | None = None) -> list[Path]:
        """Run every stage and return the sorted list of generated files."""

        LOGGER.debug("Materializing %s from %s", self.identity.raw_name, self.source_root)
        copy_template(self.source_root, self.target_path, cwd=cwd, layout=self.layout)
        self.rename_paths()
        self.remove_artifacts()
        self.remove_tool_sources()
        self.transform_contents()
        self.write_readme()
        return self.generated_files()

    def rename_paths(self) -> None:
        """Embed the new gem name in the manifest, entry point and source directories."""

        layout = self.layout
        identity = self.identity
        target = self.target_path
        lib_dir = target / layout.lib_dir
        spec_dir = target / layout.spec_dir

        _move(target / layout.manifest_name, target / layout.manifest_for(identity.raw_name))
        _move(lib_dir / layout.name, lib_dir / identity.path_safe_name)
        _move(lib_dir / layout.source_for(layout.name), lib_dir / layout.source_for(identity.raw_name))

        new_spec_dir = spec_dir / identity.path_safe_name
        _move(spec_dir / layout.name, new_spec_dir)
        _move(
            new_spec_dir / layout.spec_file_for(layout.name),
            new_spec_dir / layout.spec_file_for(identity.path_safe_name),
        )

    def remove_artifacts(self) -> None:
        """Delete development-only files the template copy may have carried along."""

        target = self.target_path
        relatives = self.layout.expand_cleanup_paths(self.identity.path_safe_name)
        doomed = [target / relative for relative in relatives]
        doomed.extend(target.glob(f"*{self.layout.archive_suffix}"))
        for path in doomed:
            _remove(path)

    def remove_tool_sources(self) -> None:
        """Delete the scaffolding tool's own modules from the library directory."""

        package_dir = self.target_path / self.layout.lib_dir / self.identity.path_safe_name
        for module in self.layout.tool_modules:
            (package_dir / self.layout.source_for(module)).unlink(missing_ok=True)

    def transform_contents(self) -> int:
        """Rewrite every text file under the target. Returns how many were rewritten."""

        rules = build_rules(self.identity, self.layout)
        transformed = 0
        for path in iter_files(self.target_path, self.layout):
            if not is_text_file(path, self.layout):
                continue
            if transform_file(path, rules, quiet=self.settings.testing):
                transformed += 1
        LOGGER.debug("Transformed %d text files under %s", transformed, self.target_path)
        return transformed

    def write_readme(self) -> Path:
        """Replace the README with boilerplate for the new gem."""

        return self.renderer.render_to_file(
            README_TEMPLATE, self.identity.context(), self.target_path / "README.md"
        )

    def generated_files(self) -> list[Path]:
        return sorted(iter_files(self.target_path, self.layout))
