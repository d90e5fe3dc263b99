"""JSON-backed wardrobe storage."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import shutil
from pathlib import Path
from typing import Iterable, Sequence

from styleai.storage.models import ClothingItem, InvalidRecordError, records

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "styleai-wardrobe"
_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def validate_user_id(user_id: str) -> str:
    """Return ``user_id`` if it is safe to use as a directory name."""

    if not _USER_ID_PATTERN.match(user_id):
        raise ValueError(f"Invalid user id: {user_id!r}")
    return user_id


class WardrobeStore:
    """Owns one wardrobe and mirrors it to a single JSON file after every change.

    Items are kept newest first. Mutations (:meth:`add`, :meth:`remove`,
    :meth:`toggle_clean`) write the whole collection back; queries never touch
    the disk.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._items: list[ClothingItem] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def items(self) -> list[ClothingItem]:
        """Return a copy of the ordered collection."""

        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> list[ClothingItem]:
        """Replace the in-memory collection with the stored one.

        Missing or malformed data yields an empty wardrobe.
        """

        self._items = self._read()
        return self.items

    def _read(self) -> list[ClothingItem]:
        if not self._path.exists():
            return []
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            logger.warning("Stored wardrobe %s is unreadable, starting empty: %s", self._path, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Stored wardrobe %s is not a list, starting empty.", self._path)
            return []
        try:
            loaded = [ClothingItem.from_record(record) for record in payload]
        except InvalidRecordError as exc:
            logger.warning("Stored wardrobe %s has an invalid record, starting empty: %s", self._path, exc)
            return []
        if len({item.id for item in loaded}) != len(loaded):
            logger.warning("Stored wardrobe %s has duplicate ids, starting empty.", self._path)
            return []
        return loaded

    def save(self) -> None:
        """Write the full collection, replacing the file in one step."""

        body = json.dumps(records(self._items), ensure_ascii=False)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        tmp_path.write_text(body, encoding="utf-8")
        os.replace(tmp_path, self._path)

    def add(self, item: ClothingItem) -> ClothingItem:
        """Insert ``item`` at the head of the wardrobe."""

        self._items.insert(0, item)
        self.save()
        return item

    def remove(self, item_id: str) -> None:
        """Delete the item with ``item_id``; unknown ids are ignored."""

        self._items = [item for item in self._items if item.id != item_id]
        self.save()

    def toggle_clean(self, item_id: str) -> ClothingItem | None:
        """Move an item between the wardrobe and the laundry basket."""

        toggled = None
        for index, item in enumerate(self._items):
            if item.id == item_id:
                toggled = item.with_clean(not item.is_clean)
                self._items[index] = toggled
                break
        self.save()
        return toggled

    def get(self, item_id: str) -> ClothingItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def find(self, item_ids: Iterable[str]) -> list[ClothingItem]:
        """Return items for ``item_ids`` in the order given, skipping unknown ids."""

        by_id = {item.id: item for item in self._items}
        return [by_id[item_id] for item_id in item_ids if item_id in by_id]

    def view_by_cleanliness(self, is_clean: bool) -> list[ClothingItem]:
        return [item for item in self._items if item.is_clean == is_clean]

    @staticmethod
    def group_by_category(items: Sequence[ClothingItem]) -> dict[str, list[ClothingItem]]:
        """Group ``items`` by category label, keys in first-seen order."""

        groups: dict[str, list[ClothingItem]] = {}
        for item in items:
            groups.setdefault(item.category.value, []).append(item)
        return groups

    def count_dirty(self) -> int:
        return sum(1 for item in self._items if not item.is_clean)


class WardrobeRepository:
    """Hands out one loaded :class:`WardrobeStore` per user."""

    def __init__(self, root: Path, generated_root: Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._root = root
        self._generated_root = generated_root
        self._key = key
        self._root.mkdir(parents=True, exist_ok=True)
        self._generated_root.mkdir(parents=True, exist_ok=True)
        self._stores: dict[str, WardrobeStore] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _store_path(self, user_id: str) -> Path:
        validate_user_id(user_id)
        return self._root / user_id / f"{self._key}.json"

    def store_for(self, user_id: str) -> WardrobeStore:
        """Return the user's store, loading it from disk on first use."""

        store = self._stores.get(user_id)
        if store is None:
            store = WardrobeStore(self._store_path(user_id))
            store.load()
            self._stores[user_id] = store
        return store

    def lock_for(self, user_id: str) -> asyncio.Lock:
        """Lock to hold around mutations so a user's writes are serialised."""

        if user_id not in self._locks:
            self._locks[user_id] = asyncio.Lock()
        return self._locks[user_id]

    def generated_dir(self, user_id: str) -> Path:
        """Return (and create) directory for generated images."""

        path = self._generated_root / validate_user_id(user_id)
        path.mkdir(parents=True, exist_ok=True)
        return path

    async def reset_user(self, user_id: str) -> None:
        """Remove stored data for the given user."""

        validate_user_id(user_id)
        async with self.lock_for(user_id):
            self._stores.pop(user_id, None)
            await asyncio.gather(
                asyncio.to_thread(self._delete_dir, self._root / user_id),
                asyncio.to_thread(self._delete_dir, self._generated_root / user_id),
            )

    @staticmethod
    def _delete_dir(path: Path) -> None:
        if path.exists():
            shutil.rmtree(path)
