"""Command line interface for stamping out new gems."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import NoReturn, Sequence

from pydantic import ValidationError

from . import __version__
from .config import RuntimeSettings
from .errors import (
    ConfigurationError,
    DirectoryNotEmptyError,
    GemstampError,
    PathRequiredError,
    TargetExistsError,
    UnknownCommandError,
    UsageError,
)
from .materializer import Materializer

ALLOWED_CURRENT_DIR_ENTRIES = (".git", ".gitignore", "README.md", "LICENSE", ".DS_Store")

HELP_TEXT = """\
Gemstamp - Ruby Gem Template Generator

USAGE:
  gemstamp new PATH [OPTIONS]  Create a new gem from template
  gemstamp version             Show version
  gemstamp help                Show this help

OPTIONS:
  -n, --name NAME              Override gem name (uses directory name by default)
  -h, --help                   Show this help
  -v, --version                Show version

EXAMPLES:
  gemstamp new my_awesome_gem           Create ./my_awesome_gem/ directory
  gemstamp new .                        Create gem in current directory
  gemstamp new --name my_gem .          Create gem named 'my_gem' in current directory
  gemstamp new nested/path/my_gem       Create nested/path/my_gem/ directory

The generated gem will include:
  - Modern Ruby gem structure
  - RSpec testing framework
  - Rake tasks for development
  - Bundler integration
  - CI/CD ready configuration

NOTE: Gem name is always inferred from the final directory name unless overridden with --name
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(f"Error: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="gemstamp",
        usage="gemstamp [command] [options]",
        add_help=False,
    )
    parser.add_argument("command", nargs="?", help="new, version or help")
    parser.add_argument("path", nargs="?", help="Directory to create the gem in")
    parser.add_argument(
        "-n",
        "--name",
        help="Override gem name (uses directory name by default)",
    )
    parser.add_argument("-v", "--version", action="store_true", help="Show version")
    parser.add_argument("-h", "--help", action="store_true", help="Show help")
    return parser


def resolve_target(path_arg: str, cwd: Path) -> Path:
    """Return ``path_arg`` as an absolute, normalised path relative to ``cwd``."""

    candidate = Path(path_arg)
    if not candidate.is_absolute():
        candidate = cwd / candidate
    return Path(os.path.normpath(candidate))


def check_current_directory(cwd: Path) -> None:
    """Raise :class:`DirectoryNotEmptyError` unless ``cwd`` only holds allowed entries."""

    unexpected = sorted(set(os.listdir(cwd)) - set(ALLOWED_CURRENT_DIR_ENTRIES))
    if unexpected:
        raise DirectoryNotEmptyError(unexpected, ALLOWED_CURRENT_DIR_ENTRIES)


def _handle_new(args: argparse.Namespace, settings: RuntimeSettings) -> int:
    path_arg = args.path
    if not path_arg:
        raise PathRequiredError()

    cwd = Path.cwd()
    target = resolve_target(path_arg, cwd)
    gem_name = args.name or target.name
    if not gem_name:
        raise UsageError(f"Error: Cannot derive a gem name from '{path_arg}', pass --name")

    if path_arg == ".":
        check_current_directory(cwd)
    elif target.exists():
        raise TargetExistsError(target)

    print(f"Creating gem: {gem_name}")
    print(f"Target path: {target}")

    generated = Materializer(target, gem_name, settings=settings).create(cwd=cwd)
    if not settings.testing:
        print("Generated files:")
        for path in generated:
            print(f"  {path}")

    print()
    print(f"Successfully created gem '{gem_name}'")
    print()
    print("Next steps:")
    if path_arg != ".":
        print(f"  cd {Path(path_arg).name}")
    print("  bundle install")
    print("  rake spec")
    return 0


def _show_help() -> int:
    print(HELP_TEXT, end="")
    return 0


def _show_version() -> int:
    print(__version__)
    return 0


def _dispatch(args: argparse.Namespace, settings: RuntimeSettings) -> int:
    # Flags win over the command word, wherever they appear.
    if args.help:
        return _show_help()
    if args.version:
        return _show_version()

    if args.command in (None, "help"):
        return _show_help()
    if args.command == "version":
        return _show_version()
    if args.command == "new":
        return _handle_new(args, settings)
    raise UnknownCommandError(args.command)


def _load_settings() -> RuntimeSettings:
    try:
        return RuntimeSettings.from_env()
    except ValidationError as exc:
        reasons = "; ".join(error["msg"] for error in exc.errors())
        raise ConfigurationError(reasons) from exc


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = _load_settings()
        logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
        args = build_parser().parse_intermixed_args(argv)
        return _dispatch(args, settings)
    except UnknownCommandError as exc:
        print(exc)
        _show_help()
        return 1
    except GemstampError as exc:
        print(exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
