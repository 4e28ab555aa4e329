from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from gemstamp.config import RuntimeSettings  # noqa: E402

BINARY_PAYLOAD = b"gemstamp\x00Gemstamp\x01\x02"
PNG_PAYLOAD = b"\x89PNG\r\n\x1a\nGemstamp 'gemstamp'"


def _write(path: Path, content: str | bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


def build_template(root: Path) -> Path:
    """Create a self-hosting gem template resembling a scaffolding tool's checkout."""

    files: dict[str, str | bytes] = {
        "gemstamp.gemspec": (
            "require_relative 'lib/gemstamp/version'\n"
            "\n"
            "Gem::Specification.new do |spec|\n"
            "  spec.name          = 'gemstamp'\n"
            "  spec.version       = Gemstamp::VERSION\n"
            "  spec.authors       = ['Jane Maintainer']\n"
            "  spec.email         = ['jane@example.org']\n"
            "  spec.summary       = 'Scaffold gems'\n"
            "  spec.description   = 'A tool that scaffolds gems from itself.'\n"
            "  spec.homepage      = 'https://github.com/gemstamp/gemstamp'\n"
            "  spec.executables   = ['gemstamp']\n"
            "  spec.add_development_dependency 'rspec', '~> 3.12'\n"
            "end\n"
        ),
        "README.md": "# Gemstamp\n\nThe original README.\n",
        "LICENSE.txt": "The MIT License\n\nCopyright (c) 2019 Jane Maintainer\n",
        "Gemfile": "source 'https://rubygems.org'\n\ngemspec\n",
        "Gemfile.lock": "PATH\n  remote: .\n  specs:\n    gemstamp (0.1.0)\n",
        ".ruby-version": "3.3.0\n",
        ".gitignore": "*.gem\n",
        "CLAUDE.md": "notes\n",
        ".claude/settings.json": "{}\n",
        ".qlty/qlty.toml": "config_version = \"0\"\n",
        ".DS_Store": b"\x00\x00\x00\x01Bud1",
        ".git/HEAD": "ref: refs/heads/main\n",
        "coverage/index.html": "<html></html>\n",
        "bin/gemstamp": "#!/usr/bin/env ruby\nrequire 'gemstamp'\n",
        "gemstamp-0.1.0.gem": b"\x00gem archive",
        "logo.png": PNG_PAYLOAD,
        "data.bin": BINARY_PAYLOAD,
        "empty.txt": b"",
        "docs/guide.md": "Install with `gem install 'gemstamp'` and `require \"gemstamp\"`.\n",
        "lib/gemstamp.rb": (
            "require_relative 'gemstamp/version'\n"
            "require_relative 'gemstamp/cli'\n"
            "require_relative 'gemstamp/generator'\n"
            "\n"
            "module Gemstamp\n"
            "end\n"
        ),
        "lib/.DS_Store": b"\x00\x00\x00\x01Bud1",
        "lib/gemstamp/version.rb": "module Gemstamp\n  VERSION = '0.1.0'\nend\n",
        "lib/gemstamp/cli.rb": "module Gemstamp\n  class CLI; end\nend\n",
        "lib/gemstamp/generator.rb": "module Gemstamp\n  class Generator; end\nend\n",
        "spec/spec_helper.rb": "require 'gemstamp'\n",
        "spec/gemstamp/gemstamp_spec.rb": "describe Gemstamp do\nend\n",
        "old_gem/old_gem.gemspec": "spec.name = 'old_gem'\n",
        "old_gem/lib/old_gem.rb": "module OldGem; end\n",
    }
    for relative, content in files.items():
        _write(root / relative, content)
    return root


@pytest.fixture(autouse=True)
def testing_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in quiet mode with the bundled template unless overridden."""

    monkeypatch.setenv("GEMSTAMP_TESTING", "1")
    monkeypatch.delenv("GEMSTAMP_TEMPLATE_ROOT", raising=False)
    monkeypatch.delenv("GEMSTAMP_LOG_LEVEL", raising=False)


@pytest.fixture()
def template_dir(tmp_path: Path) -> Path:
    return build_template(tmp_path / "template")


@pytest.fixture()
def settings(template_dir: Path) -> RuntimeSettings:
    return RuntimeSettings(testing=True, template_root=template_dir)
