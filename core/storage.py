"""
Persisted key -> JSON value store, scoped to one profile directory.

Each key lives in its own `<key>.json` file so the history log, the
settings object and the cloak profile can be read and written
independently. An absent or unreadable file is reported as the default
value, never as an error. Writes replace the whole value (last write wins).
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger("storage")

HISTORY_KEY = "cosmiclink-history"
SETTINGS_KEY = "cosmiclink-settings"
CLOAK_KEY = "cosmiclink-cloak"


class JsonKeyValueStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Ignoring unreadable value for '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(value, indent=2, default=str)

        # Write beside the target and swap in, so readers never see half a file
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        """Drop every key in this profile."""
        if not self.root.exists():
            return
        for path in self.root.glob("*.json"):
            path.unlink(missing_ok=True)

    def keys(self) -> list:
        if not self.root.exists():
            return []
        return sorted(p.stem for p in self.root.glob("*.json"))
