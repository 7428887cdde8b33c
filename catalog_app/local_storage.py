"""
Local Storage

Durable string key-value store kept in a single JSON file. Every write
replaces the file atomically.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class LocalStorage:
    """JSON-file backed key-value store with string values"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self._items: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable local storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring local storage {self.path}: not a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=str(self.path.parent), prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._items, fh, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._items[key] = value
        self._write()

    def remove_item(self, key: str):
        if self._items.pop(key, None) is not None:
            self._write()

    def clear(self):
        self._items.clear()
        self._write()

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
