"""
Design persistence

Designs are stored whole, as JSON, under `(kind, owner_id)`. Last write wins.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from event_canvas.design.defaults import default_design
from event_canvas.design.elements import Design, DesignKind, parse_design

logger = logging.getLogger(__name__)

SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def set(self, key: str, value: Dict[str, Any]) -> None: ...

    def delete(self, key: str) -> bool: ...


class MemoryStore:
    """Dict-backed store for tests and the preview sandbox"""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Dict[str, Any]) -> None:
        self._data[key] = json.dumps(value, default=str)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None


class JsonFileStore:
    """One JSON file per key inside a directory"""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not SAFE_KEY.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key '{key}'")
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        file_path = self._path(key)
        if not file_path.exists():
            return None
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def set(self, key: str, value: Dict[str, Any]) -> None:
        file_path = self._path(key)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2, default=str, ensure_ascii=False)

    def delete(self, key: str) -> bool:
        file_path = self._path(key)
        if not file_path.exists():
            return False
        file_path.unlink()
        return True


def design_key(kind: DesignKind, owner_id: str) -> str:
    return f"design_{DesignKind(kind).value}_{owner_id}"


class DesignStore:
    """Load-or-default access to per-owner designs"""

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    def exists(self, kind: DesignKind, owner_id: str) -> bool:
        return self.backend.get(design_key(kind, owner_id)) is not None

    def load(self, kind: DesignKind, owner_id: str) -> Design:
        """
        Load the stored design, or a fresh default one.

        A stored design that no longer validates is logged and replaced by
        the default; it is not deleted.
        """
        try:
            data = self.backend.get(design_key(kind, owner_id))
            if data is None:
                return default_design(kind)
            design = parse_design(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Stored %s design for %s is invalid, using defaults: %s", kind, owner_id, e)
            return default_design(kind)
        if design.kind != DesignKind(kind):
            logger.warning("Stored design for %s has kind %s, expected %s", owner_id, design.kind, kind)
            return default_design(kind)
        return design

    def save(self, owner_id: str, design: Design) -> Design:
        self.backend.set(design_key(design.kind, owner_id), design.model_dump(mode="json"))
        logger.info("Saved %s design for %s (%d elements)", design.kind, owner_id, len(design.elements))
        return design

    def reset(self, kind: DesignKind, owner_id: str) -> Design:
        """Forget the stored design and return the defaults"""
        self.backend.delete(design_key(kind, owner_id))
        return default_design(kind)
