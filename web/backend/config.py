import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import BaseModel

ROOT_DIR = Path(__file__).parent.parent.parent


class Settings(BaseModel):
    storage_dir: Path = ROOT_DIR / "designs_storage"
    exports_dir: Path = ROOT_DIR / "exports"
    cors_origins: List[str] = [
        "http://localhost:5173",  # Vite default port
        "http://localhost:3000",
    ]


def load_settings() -> Settings:
    settings = Settings()
    if os.getenv("EVENT_CANVAS_STORAGE_DIR"):
        settings.storage_dir = Path(os.environ["EVENT_CANVAS_STORAGE_DIR"])
    if os.getenv("EVENT_CANVAS_EXPORTS_DIR"):
        settings.exports_dir = Path(os.environ["EVENT_CANVAS_EXPORTS_DIR"])
    if os.getenv("EVENT_CANVAS_CORS_ORIGINS"):
        settings.cors_origins = [o.strip() for o in os.environ["EVENT_CANVAS_CORS_ORIGINS"].split(",") if o.strip()]
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
