"""
Preference Store

Persists string preferences in a small JSON file.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from folio.contexts.theming.logger import _log_warning


class PreferenceStore:
    """
    JSON-file key/value store for user preferences.

    A missing or unreadable file reads as empty; non-string values read as absent.
    """

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            _log_warning(f"Ignoring unreadable preference file {self.path}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
