"""
Shared plumbing for the on-device state stores.

Each store owns one storage key, keeps the decoded value in memory and
tells subscribed views when it changes. Stores are plain objects built
once by the orchestrator and handed to whoever needs them.
"""

from typing import Callable, Optional

import structlog

from anthaathi.audit import AuditLogger
from anthaathi.services.storage import KeyValueStorageInterface, StorageError


logger = structlog.get_logger(__name__)

Listener = Callable[["ObservableStore"], None]


class ObservableStore:
    """Base class: storage access, load state and change listeners."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger
        self._listeners: list[Listener] = []
        self._is_loading = False
        self._loaded = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(store)` after every change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    async def _read_raw(self) -> Optional[str]:
        """
        Read this store's key.

        A storage failure reads the same as an absent key: the store
        falls back to its empty state.
        """
        self._is_loading = True
        try:
            return await self._storage.get_item(self._key)
        except StorageError as e:
            logger.warning("store_read_failed", key=self._key, error=str(e))
            if self._audit_logger:
                await self._audit_logger.log_storage_error(self._key, str(e))
            return None
        finally:
            self._is_loading = False
            self._loaded = True

    async def _write_raw(self, value: Optional[str]) -> None:
        """
        Persist this store's key, or remove it when `value` is None.

        Raises:
            StorageError: Re-raised after it is logged and audited; the
                caller leaves its in-memory state untouched
        """
        try:
            if value is None:
                await self._storage.remove_item(self._key)
            else:
                await self._storage.set_item(self._key, value)
        except StorageError as e:
            logger.error("store_write_failed", key=self._key, error=str(e))
            if self._audit_logger:
                await self._audit_logger.log_error(
                    type(e).__name__,
                    str(e),
                    {"key": self._key},
                )
            raise
