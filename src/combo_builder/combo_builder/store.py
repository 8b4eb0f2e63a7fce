"""Keyed storage of combo configurations.

The whole collection lives under one key of a key-value medium and is
rewritten on every change (read-modify-write of the full list). Reads never
fail: missing or unreadable data is treated as an empty collection. Writes
never raise either; they report whether the change was made durable so the
caller can warn when it was not.
"""

import os
import tempfile
import uuid
from pathlib import Path
from typing import NamedTuple, Protocol

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .exceptions import PersistenceError
from .models import ComboChanges, ComboConfig, ComboDraft

DEFAULT_STORAGE_KEY = "combo_products"

_COMBO_LIST = TypeAdapter(list[ComboConfig])


# ---------------------------------------------------------------------------
# Storage media
# ---------------------------------------------------------------------------


class KeyValueStorage(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage, used by tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStorage:
    """One `<key>.json` file per key inside `directory`.

    Writes go to a temp file in the same directory and are moved into place
    with os.replace, so a crash mid-write leaves the previous value intact.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise PersistenceError(key, exc) from exc


# ---------------------------------------------------------------------------
# Combo store
# ---------------------------------------------------------------------------


class WriteResult(NamedTuple):
    """Outcome of a store write.

    `combo` is the record as the caller should now see it (None for deletes).
    `durable` is False when the medium refused the write; `error` then holds
    the reason.
    """

    combo: ComboConfig | None
    durable: bool
    error: str | None = None


def generate_id() -> str:
    return str(uuid.uuid4())


class ComboStore:
    """CRUD over the combo collection held in a KeyValueStorage.

    Construct one per application and pass it to whatever needs it. The
    store does not check business rules; callers validate before creating
    or updating (see `admin.ComboAdmin`).
    """

    def __init__(
        self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY
    ) -> None:
        self.storage = storage
        self.key = key

    def _load(self) -> list[ComboConfig]:
        try:
            raw = self.storage.read(self.key)
        except (OSError, UnicodeDecodeError):
            logger.opt(exception=True).warning(
                "Could not read combo storage key {}", self.key
            )
            return []
        if not raw:
            return []
        try:
            return _COMBO_LIST.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Ignoring unreadable combo storage ({} errors) under key {}",
                exc.error_count(),
                self.key,
            )
            return []

    def _save(self, combos: list[ComboConfig]) -> str | None:
        """Persist the full collection. Returns an error message on failure."""
        payload = _COMBO_LIST.dump_json(combos).decode("utf-8")
        try:
            self.storage.write(self.key, payload)
        except (OSError, PersistenceError) as exc:
            logger.error("Combo storage write failed: {}", exc)
            return str(exc)
        logger.debug("Saved {} combos under key {}", len(combos), self.key)
        return None

    def get_all(self) -> list[ComboConfig]:
        return self._load()

    def get_by_id(self, combo_id: str) -> ComboConfig | None:
        return next((c for c in self._load() if c.id == combo_id), None)

    def create(self, draft: ComboDraft) -> WriteResult:
        combos = self._load()
        combo = ComboConfig(id=generate_id(), **draft.model_dump())
        combos.append(combo)
        error = self._save(combos)
        logger.info("Created combo {} ({})", combo.id, combo.name)
        return WriteResult(combo=combo, durable=error is None, error=error)

    def update(self, combo_id: str, changes: ComboChanges) -> WriteResult | None:
        combos = self._load()
        index = next((i for i, c in enumerate(combos) if c.id == combo_id), None)
        if index is None:
            logger.debug("Update skipped, combo {} not found", combo_id)
            return None
        updated = combos[index].merged(changes)
        combos[index] = updated
        error = self._save(combos)
        logger.info("Updated combo {} ({})", updated.id, updated.name)
        return WriteResult(combo=updated, durable=error is None, error=error)

    def delete(self, combo_id: str) -> WriteResult:
        combos = self._load()
        remaining = [c for c in combos if c.id != combo_id]
        if len(remaining) == len(combos):
            logger.debug("Delete of unknown combo {} is a no-op", combo_id)
        error = self._save(remaining)
        return WriteResult(combo=None, durable=error is None, error=error)
