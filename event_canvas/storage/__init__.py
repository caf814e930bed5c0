"""Design persistence"""

from event_canvas.storage.design_store import DesignStore, JsonFileStore, MemoryStore

__all__ = ["DesignStore", "JsonFileStore", "MemoryStore"]
