"""Persistent key/value settings stored as JSON."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

_log = logging.getLogger(__name__)

APP_NAME = "tystnad"


def default_settings_path() -> Path:
    """Return the per-user location of the settings file."""
    return Path(user_config_dir(APP_NAME)) / "settings.json"


class Settings:
    """A small settings store backed by a JSON file."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def _read(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _log.warning("Ignoring unreadable settings file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def load(self, key: str, default: Any = None) -> Any:
        """Return the stored value for `key`, or `default` when it is absent."""
        data = self._read()
        if key not in data:
            _log.debug("Value '%s' not found. Returning default.", key)
            return default
        value = data[key]
        _log.debug("Value '%s' is now '%s'", key, value)
        return value

    def load_str(self, key: str, default: str = "") -> str:
        """Return the stored value for `key` as text; absent or empty gives `default`."""
        data = self._read()
        if key not in data or data[key] is None:
            _log.debug("Value '%s' not found. Returning default.", key)
            return default
        value = str(data[key])
        _log.debug("Value '%s' is now '%s'", key, value)
        return value or default

    def save(self, key: str, value: Any) -> None:
        """Store `value` under `key` and write the file."""
        data = self._read()
        data[key] = value
        self._write(data)
        _log.debug("Value '%s' set to '%s'", key, value)