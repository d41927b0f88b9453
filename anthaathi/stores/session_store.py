"""
Session Store

Holds the single session record ("who is logged in").

DESIGN DECISION: Absence of a record is the logged-out state, not an
error. Login always replaces the record, logout deletes it and profile
edits merge into it. There is no history.
"""

import json
from typing import Optional, Union

import structlog

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.models.profile import Language, ProfileUpdate, UserProfile
from anthaathi.services.storage import KeyValueStorageInterface
from anthaathi.stores.base import ObservableStore


logger = structlog.get_logger(__name__)


class SessionStore(ObservableStore):
    """Persisted session record with login, merge-update and logout."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(
            storage,
            key or get_settings().storage.user_key,
            audit_logger,
        )
        self._user: Optional[UserProfile] = None

    @property
    def user(self) -> Optional[UserProfile]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def _decode(self, raw: Optional[str]) -> Optional[UserProfile]:
        if not raw:
            return None
        try:
            return UserProfile.model_validate(json.loads(raw))
        except ValueError as e:
            logger.warning("session_record_unreadable", key=self._key, error=str(e))
            return None

    async def load(self) -> Optional[UserProfile]:
        """Restore the session persisted by a previous run, if any."""
        self._user = self._decode(await self._read_raw())
        logger.debug("session_loaded", authenticated=self.is_authenticated)
        self._notify()
        return self._user

    async def login(
        self,
        phone: str,
        language: Language = Language.ENGLISH,
    ) -> UserProfile:
        """
        Start a new session for a phone number.

        Any previous session is overwritten. Name and location start
        empty; `language` mirrors the current language preference.
        """
        user = UserProfile(phone=phone, language=language)
        await self._write_raw(user.model_dump_json())
        self._user = user

        if self._audit_logger:
            await self._audit_logger.log_user_logged_in(user.uid, phone)

        self._notify()
        return user

    async def update_profile(
        self,
        update: Union[ProfileUpdate, dict, None] = None,
        **fields,
    ) -> Optional[UserProfile]:
        """
        Merge the given fields into the session record and persist it.

        Accepts a ProfileUpdate, a dict, or keyword arguments. Fields
        passed as None are left unchanged.
        Does nothing (and returns None) when nobody is logged in.
        """
        if self._user is None:
            return None

        if update is None:
            update = ProfileUpdate(**fields)
        elif isinstance(update, dict):
            update = ProfileUpdate(**{**update, **fields})
        elif fields:
            update = ProfileUpdate(**{**update.changes(), **fields})

        changes = update.changes()
        updated = UserProfile.model_validate({**self._user.model_dump(), **changes})

        await self._write_raw(updated.model_dump_json())
        self._user = updated

        if self._audit_logger:
            await self._audit_logger.log_profile_updated(updated.uid, sorted(changes))

        self._notify()
        return updated

    async def logout(self) -> None:
        """Delete the persisted record and forget the user."""
        uid = self._user.uid if self._user else None
        await self._write_raw(None)
        self._user = None

        if self._audit_logger:
            await self._audit_logger.log_user_logged_out(uid)

        self._notify()
