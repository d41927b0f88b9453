"""
Persisted app state: the session, the language preference and the ledger.
"""

from anthaathi.stores.base import ObservableStore
from anthaathi.stores.expense_store import ExpenseStore
from anthaathi.stores.language_store import LanguageStore
from anthaathi.stores.session_store import SessionStore

__all__ = [
    "ExpenseStore",
    "LanguageStore",
    "ObservableStore",
    "SessionStore",
]
