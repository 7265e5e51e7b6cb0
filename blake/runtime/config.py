"""Persistent JSON config helpers.

Stores general settings and user key bindings.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from ..input.keymap import Keymap, load_keymap
from .navigator import DEFAULT_SPLIT_RATIO, clamp_split_ratio

logger = logging.getLogger(__name__)

APP_NAME = "blake"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_DIFF_FORMATTER = "delta"
DEFAULT_PYGMENTS_STYLE = "monokai"


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is logged and otherwise ignored.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.warning("could not write config %s: %s", config_path, exc)


@dataclass(frozen=True)
class GeneralConfig:
    diff_formatter: str = DEFAULT_DIFF_FORMATTER
    split_ratio: int = DEFAULT_SPLIT_RATIO
    pygments_style: str = DEFAULT_PYGMENTS_STYLE


@dataclass
class AppConfig:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    keymap: Keymap = field(default_factory=Keymap.with_defaults)
    warnings: list[str] = field(default_factory=list)


def _general_section(data: dict[str, object]) -> dict[str, object]:
    section = data.get("general")
    return section if isinstance(section, dict) else {}


def _load_general(data: dict[str, object], warnings: list[str]) -> GeneralConfig:
    section = _general_section(data)

    diff_formatter = section.get("diff_formatter", DEFAULT_DIFF_FORMATTER)
    if not isinstance(diff_formatter, str) or not diff_formatter.strip():
        warnings.append(f"general.diff_formatter must be a string, got {diff_formatter!r}")
        diff_formatter = DEFAULT_DIFF_FORMATTER

    split_ratio = section.get("split_ratio", DEFAULT_SPLIT_RATIO)
    if isinstance(split_ratio, bool) or not isinstance(split_ratio, (int, float)):
        warnings.append(f"general.split_ratio must be a number, got {split_ratio!r}")
        split_ratio = DEFAULT_SPLIT_RATIO

    pygments_style = section.get("pygments_style", DEFAULT_PYGMENTS_STYLE)
    if not isinstance(pygments_style, str) or not pygments_style:
        warnings.append(f"general.pygments_style must be a string, got {pygments_style!r}")
        pygments_style = DEFAULT_PYGMENTS_STYLE

    return GeneralConfig(
        diff_formatter=diff_formatter.strip().lower(),
        split_ratio=clamp_split_ratio(int(split_ratio)),
        pygments_style=pygments_style,
    )


def load_app_config(path: Path | None = None) -> AppConfig:
    """Read config into typed settings, collecting every skipped value as a warning."""
    data = load_config(path)
    warnings: list[str] = []
    general = _load_general(data, warnings)
    for warning in warnings:
        logger.warning("config: %s", warning)
    keymap, keymap_warnings = load_keymap(data.get("keymap"))
    warnings.extend(keymap_warnings)
    logger.info("loaded config from %s", path if path is not None else CONFIG_PATH)
    return AppConfig(general=general, keymap=keymap, warnings=warnings)


def save_split_ratio(split_ratio: int, path: Path | None = None) -> None:
    """Persist the diff split ratio, keeping every other config key."""
    config = load_config(path)
    general = dict(_general_section(config))
    general["split_ratio"] = clamp_split_ratio(split_ratio)
    config["general"] = general
    save_config(config, path)
