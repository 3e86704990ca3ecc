# eventa/storage.py
import json
import os
from typing import Any, Optional

import anyio
from loguru import logger

from eventa.config import STORAGE_DIR

TOKEN_KEY = "token"
USER_KEY = "user"
CHAT_MESSAGES_KEY = "chatMessages_v1"


class LocalStorage:
    """
    Small persistent key/value store kept as one JSON document on disk.

    Unreadable content (hand edits, a crash mid-write) is thrown away and the
    store starts empty again instead of failing every later call.
    """

    def __init__(self, directory: str = STORAGE_DIR, filename: str = "storage.json"):
        self.path = anyio.Path(os.path.expanduser(directory)) / filename
        self._lock = anyio.Lock()

    async def _load(self) -> dict:
        if not await self.path.exists():
            return {}
        try:
            data = json.loads(await self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable local storage {self.path}: {e}")
            await self.path.unlink(missing_ok=True)
            return {}
        return data if isinstance(data, dict) else {}

    async def _save(self, data: dict):
        await self.path.parent.mkdir(parents=True, exist_ok=True)
        await self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    async def get_item(self, key: str, default: Optional[Any] = None) -> Any:
        async with self._lock:
            data = await self._load()
        return data.get(key, default)

    async def set_item(self, key: str, value: Any):
        async with self._lock:
            data = await self._load()
            data[key] = value
            await self._save(data)

    async def remove_item(self, key: str):
        async with self._lock:
            data = await self._load()
            if key in data:
                del data[key]
                await self._save(data)
