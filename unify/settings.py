"""Application settings for normalization and indexing."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import hashlib
import json
import os
from pathlib import Path
from typing import Any, Optional

from .errors import ValidationError


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Settings that change the UID produced for a given identifier
_UID_RELEVANT = ("fold_diacritics",)


@dataclass(frozen=True)
class Settings:
    fold_diacritics: bool = True
    record_tags: bool = True
    ignore_hidden: bool = True
    extensions: tuple[str, ...] = ()


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (UNIFY_FOLD_DIACRITICS, UNIFY_IGNORE_HIDDEN)
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only

    Returns:
        Settings object with resolved values

    Raises:
        ValidationError: unknown keys, wrong value types, or unparsable JSON
    """
    json_settings: dict[str, Any] = {}
    if path and path.exists():
        try:
            json_settings = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid settings file {path}: {exc}") from exc
        if not isinstance(json_settings, dict):
            raise ValidationError(f"Settings file {path} must contain a JSON object")

    known = {item.name for item in fields(Settings)}
    unknown = sorted(set(json_settings) - known)
    if unknown:
        raise ValidationError(f"Unknown settings: {', '.join(unknown)}")

    fold_diacritics = _env_bool("UNIFY_FOLD_DIACRITICS")
    if fold_diacritics is None:
        fold_diacritics = _require_bool(json_settings, "fold_diacritics", True)

    ignore_hidden = _env_bool("UNIFY_IGNORE_HIDDEN")
    if ignore_hidden is None:
        ignore_hidden = _require_bool(json_settings, "ignore_hidden", True)

    record_tags = _require_bool(json_settings, "record_tags", True)

    extensions = json_settings.get("extensions", [])
    if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
        raise ValidationError("Setting 'extensions' must be a list of strings")

    return Settings(
        fold_diacritics=fold_diacritics,
        record_tags=record_tags,
        ignore_hidden=ignore_hidden,
        extensions=tuple(normalize_extension(ext) for ext in extensions),
    )


def default_config_path() -> Path:
    return Path.home() / ".config" / "unify" / "settings.json"


def normalize_extension(ext: str) -> str:
    """Return ``ext`` lowercased with a leading dot ("PNG" -> ".png")."""
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def settings_hash(settings: Settings) -> str:
    """Stable hash of the settings that affect UIDs.

    Persisted indexes compare this to detect a change of normalization
    parameters.
    """
    values = asdict(settings)
    payload = {key: values[key] for key in _UID_RELEVANT}
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def _env_bool(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValidationError(f"Environment variable {name} must be a boolean, got {raw!r}")


def _require_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValidationError(f"Setting '{key}' must be a boolean")
    return value
