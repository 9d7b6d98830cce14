from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict


logger = logging.getLogger(__name__)


class JsonStorage:
    """Tiny key/value store backed by one JSON file.

    Failures never raise: writers return False and readers fall back to the
    given default, with a warning in the log.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        # serialize first, then swap the file in whole
        text = json.dumps(data)
        fd, tmp_path = tempfile.mkstemp(
            prefix=".tmp-", suffix=".json", dir=os.path.dirname(os.path.abspath(self.path))
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except OSError:
            os.unlink(tmp_path)
            raise

    def save(self, key: str, value: Any) -> bool:
        try:
            data = self._read_all()
            data[key] = value
            self._write_all(data)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to save %r to %s: %s", key, self.path, e)
            return False

    def load(self, key: str, default: Any = None) -> Any:
        try:
            return self._read_all().get(key, default)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %r from %s: %s", key, self.path, e)
            return default

    def remove(self, key: str) -> bool:
        try:
            data = self._read_all()
            data.pop(key, None)
            self._write_all(data)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to remove %r from %s: %s", key, self.path, e)
            return False

    def clear(self) -> bool:
        try:
            self._write_all({})
            return True
        except OSError as e:
            logger.warning("Failed to clear %s: %s", self.path, e)
            return False
