"""
Language Store

Holds the language preference and exposes the matching dictionary.
This store is the authoritative source of the language; the copy kept
in the session record is derived from it (see the orchestrator).
"""

from typing import Mapping, Optional, Union

import structlog

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.i18n import get_dictionary
from anthaathi.models.expense import ExpenseCategory
from anthaathi.models.profile import Language
from anthaathi.services.storage import KeyValueStorageInterface
from anthaathi.stores.base import ObservableStore


logger = structlog.get_logger(__name__)


class LanguageStore(ObservableStore):
    """Two-valued language preference, persisted as a plain string."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: Optional[str] = None,
        default: Optional[Language] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(
            storage,
            key or get_settings().storage.language_key,
            audit_logger,
        )
        self._default = default or Language(get_settings().app.default_language)
        self._language = self._default

    @property
    def language(self) -> Language:
        return self._language

    @property
    def dictionary(self) -> Mapping[str, str]:
        """Read-only dictionary for the current language."""
        return get_dictionary(self._language)

    def translate(self, key: str) -> Optional[str]:
        """Display string for a key, or None if the dictionary lacks it."""
        return self.dictionary.get(key)

    def category_label(self, category: Union[str, ExpenseCategory]) -> str:
        """Translated label of an expense category; unknown ones are shown as-is."""
        value = category.value if isinstance(category, ExpenseCategory) else str(category)
        return self.translate(value) or value

    async def load(self) -> Language:
        """Restore the saved preference; nothing saved means the default."""
        raw = await self._read_raw()
        try:
            self._language = Language(raw) if raw else self._default
        except ValueError:
            logger.warning("unknown_language_code", key=self._key, value=raw)
            self._language = self._default
        self._notify()
        return self._language

    async def set_language(self, code: Union[str, Language]) -> Language:
        """
        Switch language and persist the choice.

        Raises:
            ValueError: If the code is not 'en' or 'ta'
        """
        language = Language(code)
        previous = self._language
        await self._write_raw(language.value)
        self._language = language

        if self._audit_logger and previous != language:
            await self._audit_logger.log_language_changed(previous.value, language.value)

        self._notify()
        return language
