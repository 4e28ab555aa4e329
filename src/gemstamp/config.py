"""Configuration shared by the materializer and the command line."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .naming import path_safe_name, symbol_name

_TRUTHY = {"1", "true", "yes", "on"}

BUNDLED_TEMPLATE = Path(__file__).resolve().parent / "skeleton"


def template_root() -> Path:
    """Return the template tree shipped with the installed package."""

    return BUNDLED_TEMPLATE


@dataclass(slots=True, frozen=True)
class GemIdentity:
    """Derived identifiers describing the gem being created.

    Attributes
    ----------
    raw_name:
        The name chosen by the user, either the final segment of the target
        path or the ``--name`` override. Used for the manifest, the entry
        point file and quoted references.
    symbol_name:
        The Ruby module name, e.g. ``MyAwesomeGem`` for ``my-awesome-gem``.
    path_safe_name:
        :attr:`raw_name` with hyphens replaced by underscores. Used for the
        library and spec directories and ``require`` paths.
    """

    raw_name: str
    symbol_name: str
    path_safe_name: str

    @classmethod
    def from_name(cls, name: str) -> "GemIdentity":
        """Build a :class:`GemIdentity` from the raw gem name."""

        if not name:
            raise ValueError("gem name must not be empty")

        return cls(
            raw_name=name,
            symbol_name=symbol_name(name),
            path_safe_name=path_safe_name(name),
        )

    def context(self) -> Mapping[str, str]:
        """Return a dictionary compatible with :class:`~gemstamp.template.TemplateRenderer`."""

        return {
            "raw_name": self.raw_name,
            "symbol_name": self.symbol_name,
            "path_safe_name": self.path_safe_name,
        }


class RuntimeSettings(BaseModel):
    """Process level settings read from the environment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    testing: bool = Field(False, description="Suppress listings and skip diagnostics.")
    template_root: Path | None = Field(None, description="Override for the bundled template tree.")
    log_level: str = Field("WARNING", description="Level passed to logging.basicConfig.")

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.strip().upper() or "WARNING"
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RuntimeSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            GEMSTAMP_TESTING, GEMSTAMP_TEMPLATE_ROOT, GEMSTAMP_LOG_LEVEL.
        """

        env = os.environ if environ is None else environ
        template_root = env.get("GEMSTAMP_TEMPLATE_ROOT")
        return cls(
            testing=env.get("GEMSTAMP_TESTING", "").strip().lower() in _TRUTHY,
            template_root=Path(template_root) if template_root else None,
            log_level=env.get("GEMSTAMP_LOG_LEVEL", "WARNING"),
        )


__all__ = ["BUNDLED_TEMPLATE", "GemIdentity", "RuntimeSettings", "template_root"]
