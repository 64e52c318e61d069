"""
User Store - Per-User Course List Persistence

Keeps each user's saved course list in a key-value backend laid out as:

    {"UserCourses": {<user_id>: {"courseList": ["null", "12345", ...]}}}

A freshly created list holds only the sentinel "null", which is never
reported as an entry. Mutations are read-entire-list / modify /
write-entire-list, so ensure/add/remove for one user are serialized by a
per-user asyncio.Lock. Every backend call is bounded by a timeout and
any failure surfaces as StoreUnavailable.
"""

import asyncio
import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections import defaultdict
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Optional

from config import EMPTY_LIST_SENTINEL, USER_COURSES_KEY
from core.errors import StoreUnavailable
from core.models import AddResult, EnsureResult, RemoveResult

logger = logging.getLogger(__name__)


# ============================================================================
# BACKENDS
# ============================================================================

class KeyValueBackend(ABC):
    """Minimal get/set contract the store needs from a persistence engine."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the record stored under key, or None."""

    @abstractmethod
    async def set(self, key: str, value: Dict[str, Any]) -> None:
        """Replace the record stored under key."""


class InMemoryBackend(KeyValueBackend):
    """Process-local backend, used by the chat console and tests."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self._data: Dict[str, Dict[str, Any]] = copy.deepcopy(initial or {})

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        record = self._data.get(key)
        return copy.deepcopy(record) if record is not None else None

    async def set(self, key: str, value: Dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileBackend(KeyValueBackend):
    """
    Single JSON document on disk.

    The whole file is rewritten on every set, so writes from different
    users share one file lock.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._file_lock = asyncio.Lock()

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {USER_COURSES_KEY: {}}

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict) or not isinstance(data.get(USER_COURSES_KEY, {}), dict):
            raise ValueError(f"{self.path} does not contain a {USER_COURSES_KEY} object")
        data.setdefault(USER_COURSES_KEY, {})
        return data

    def _write_document(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f"{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        try:
            os.replace(tmp.name, self.path)
        except OSError:
            os.unlink(tmp.name)
            raise

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        data = await asyncio.to_thread(self._read_document)
        return data[USER_COURSES_KEY].get(key)

    async def set(self, key: str, value: Dict[str, Any]) -> None:
        """
        Rewrite the document with key set to value.

        The read-modify-write is shielded: a caller that stops waiting
        (timeout) does not release the file lock while the write thread
        is still running, so the next set starts only after it lands.
        """
        task = asyncio.ensure_future(self._locked_set(key, value))
        task.add_done_callback(self._log_detached_failure)
        await asyncio.shield(task)

    async def _locked_set(self, key: str, value: Dict[str, Any]) -> None:
        async with self._file_lock:
            data = await asyncio.to_thread(self._read_document)
            data[USER_COURSES_KEY][key] = value
            await asyncio.to_thread(self._write_document, data)

    @staticmethod
    def _log_detached_failure(task: "asyncio.Task[None]") -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"❌ Write to user store file failed: {task.exception()}")


# ============================================================================
# USER STORE
# ============================================================================

class UserStore:
    """Per-user course list operations with idempotent semantics."""

    def __init__(
        self,
        backend: KeyValueBackend,
        timeout: float = 5.0,
        sentinel: str = EMPTY_LIST_SENTINEL,
    ):
        self._backend = backend
        self._timeout = timeout
        self._sentinel = sentinel
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def _call(self, awaitable: Awaitable[Any], operation: str) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"❌ User store {operation} timed out after {self._timeout}s")
            raise StoreUnavailable(f"User store {operation} timed out") from e
        except StoreUnavailable:
            raise
        except Exception as e:
            logger.error(f"❌ User store {operation} failed: {type(e).__name__}: {e}")
            raise StoreUnavailable(f"User store {operation} failed: {e}") from e

    async def _read_raw(self, user_id: str) -> Optional[List[str]]:
        record = await self._call(self._backend.get(user_id), "get")
        if record is None:
            return None
        raw = record.get("courseList") if isinstance(record, dict) else None
        if not isinstance(raw, list):
            return [self._sentinel]
        return [str(entry) for entry in raw]

    async def _write_raw(self, user_id: str, entries: List[str]) -> None:
        await self._call(self._backend.set(user_id, {"courseList": entries}), "set")

    def _check_entry(self, entry: str) -> str:
        entry = str(entry).strip()
        if not entry or entry == self._sentinel:
            raise ValueError(f"Invalid course list entry: {entry!r}")
        return entry

    async def ensure_user(self, user_id: str) -> EnsureResult:
        """
        Create the user's list in the sentinel state if it does not exist.

        Safe to call on every message: only the first call writes.
        """
        async with self._locks[user_id]:
            existing = await self._read_raw(user_id)
            if existing is not None:
                logger.debug(f"👋 Welcome back: {user_id}")
                return EnsureResult.ALREADY_EXISTS

            await self._write_raw(user_id, [self._sentinel])
            logger.info(f"🆕 Created course list for {user_id}")
            return EnsureResult.CREATED

    async def get_list(self, user_id: str) -> List[str]:
        """Saved entries in insertion order, without the sentinel."""
        raw = await self._read_raw(user_id)
        if raw is None:
            return []
        return [entry for entry in raw if entry != self._sentinel]

    async def add_entry(self, user_id: str, entry: str) -> AddResult:
        """Append entry unless it is already on the list."""
        entry = self._check_entry(entry)
        async with self._locks[user_id]:
            raw = await self._read_raw(user_id)
            if raw is None:
                raw = [self._sentinel]

            if entry in raw:
                logger.info(f"⚠️  {entry} already on {user_id}'s list")
                return AddResult.ALREADY_PRESENT

            raw.append(entry)
            await self._write_raw(user_id, raw)
            logger.info(f"➕ Added {entry} to {user_id}'s list")
            return AddResult.ADDED

    async def remove_entry(self, user_id: str, entry: str) -> RemoveResult:
        """Delete one occurrence of entry; no write when it is absent."""
        entry = self._check_entry(entry)
        async with self._locks[user_id]:
            raw = await self._read_raw(user_id)
            if raw is None or entry not in raw:
                logger.info(f"➖ {entry} not in {user_id}'s list")
                return RemoveResult.NOT_PRESENT

            raw.remove(entry)
            await self._write_raw(user_id, raw)
            logger.info(f"➖ Removed {entry} from {user_id}'s list")
            return RemoveResult.REMOVED
