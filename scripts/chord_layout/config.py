"""Settings models and loaders for chord layout tooling."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

ExportFormat = Literal["keychordz", "yaml", "json", "qmk-keymap", "qmk-combos"]


class ParseSettings(BaseModel):
    """How layout text is read."""

    comment_prefix: str = Field("#", min_length=1, description="Lines starting with this are skipped")


class CheckSettings(BaseModel):
    """Which advisory checks run. Duplicate chords are always reported."""

    duplicate_output: bool = Field(True, description="Warn when chords share an output")
    unreachable_keys: bool = Field(True, description="Warn about keys used by no chord")
    hand_balance: bool = Field(True, description="Warn when one hand has no chords")


class ExportSettings(BaseModel):
    """Defaults for the export command."""

    format: ExportFormat = "keychordz"
    strict: bool = Field(False, description="Refuse to export when check reports errors")


class LayoutSettings(BaseModel):
    """Top-level settings file."""

    parse: ParseSettings = Field(default_factory=ParseSettings)
    check: CheckSettings = Field(default_factory=CheckSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_settings(path: Path | None) -> LayoutSettings:
    """Load settings from a YAML file, falling back to defaults.

    Args:
        path: Settings file, or None

    Returns:
        LayoutSettings (defaults if the file does not exist)
    """
    if path is None or not path.exists():
        return LayoutSettings()

    data = load_yaml(path)
    return LayoutSettings.model_validate(data)
