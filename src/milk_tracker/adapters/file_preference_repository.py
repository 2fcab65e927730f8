"""Local JSON file repository for household preferences."""

import json
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path

from milk_tracker.services.persistence import PreferenceRepository


@dataclass
class FilePreferenceRepository(PreferenceRepository):
    """Stores preferences as a flat JSON object of strings."""

    path: Path
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing the file atomically."""
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, sort_keys=True)
            Path(tmp_name).replace(self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"Corrupt preferences file: {self.path}") from exc
        if not isinstance(data, dict):
            raise RuntimeError(f"Corrupt preferences file: {self.path}")
        return data
