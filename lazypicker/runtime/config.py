"""Picker configuration and persistent JSON defaults.

Explicit options always win over values stored in the config file.
All file access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from ..search.normalize import Normalizer
from ..search.types import OrderBy
from ..ui_theme import normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "lazypicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class PickerConfig:
    """Options recognized by a picker session."""

    order_by: OrderBy = OrderBy.SCORE
    reverse: bool = False
    multi_select: bool = False
    max_selected: int | None = None
    normalize: bool = False
    normalizer: Normalizer | None = None
    theme: str = "default"
    no_color: bool = False

    def with_overrides(self, **overrides: object) -> PickerConfig:
        """Return a copy with every non-``None`` override applied."""
        given = {key: value for key, value in overrides.items() if value is not None}
        if "order_by" in given:
            given["order_by"] = OrderBy.parse(given["order_by"])  # type: ignore[arg-type]
        if "max_selected" in given:
            given["max_selected"] = _coerce_max_selected(given["max_selected"])
        return replace(self, **given)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception:
        logger.debug("ignoring unreadable config at %s", CONFIG_PATH, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        logger.debug("could not write config to %s", CONFIG_PATH, exc_info=True)


def _coerce_max_selected(value: object) -> int | None:
    """Positive integers only; booleans and anything else mean unlimited."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _load_bool(data: dict[str, object], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    logger.warning("config key %r must be a boolean, got %r", key, value)
    return None


def _load_order_by(data: dict[str, object]) -> OrderBy | None:
    value = data.get("order_by")
    if value is None:
        return None
    try:
        return OrderBy.parse(value)  # type: ignore[arg-type]
    except ValueError:
        logger.warning("config key 'order_by' has unknown value %r", value)
        return None


def _load_theme(data: dict[str, object]) -> str | None:
    value = data.get("theme")
    if not isinstance(value, str) or not value.strip():
        return None
    return normalize_theme_name(value)


def load_picker_config(**overrides: object) -> PickerConfig:
    """Build a ``PickerConfig`` from file defaults merged under ``overrides``.

    An override of ``None`` means "not given" and leaves the file value (or
    built-in default) in place.
    """
    data = load_config()
    file_values: dict[str, object] = {
        "order_by": _load_order_by(data),
        "reverse": _load_bool(data, "reverse"),
        "normalize": _load_bool(data, "normalize"),
        "theme": _load_theme(data),
        "max_selected": _coerce_max_selected(data.get("max_selected")),
    }
    return PickerConfig().with_overrides(**file_values).with_overrides(**overrides)


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def save_order_by(order_by: OrderBy | str) -> None:
    config = load_config()
    config["order_by"] = OrderBy.parse(order_by).value
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "PickerConfig",
    "load_config",
    "save_config",
    "load_picker_config",
    "save_theme_name",
    "save_order_by",
]
