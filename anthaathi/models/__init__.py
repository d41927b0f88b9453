"""
Data Models Package

This package contains all Pydantic models used in Anthaathi.
All data flowing through the app must conform to these schemas.
"""

from anthaathi.models.advisory import ChatMessage, DiagnosisResult, MarketPrice
from anthaathi.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    mask_phone,
)
from anthaathi.models.expense import Expense, ExpenseCategory
from anthaathi.models.profile import Language, ProfileUpdate, UserProfile
from anthaathi.models.validation import ValidationIssue, ValidationResult
from anthaathi.models.weather import WeatherSnapshot, fallback_snapshot

__all__ = [
    # Session models
    "Language",
    "ProfileUpdate",
    "UserProfile",
    # Ledger models
    "Expense",
    "ExpenseCategory",
    # Advisory models
    "ChatMessage",
    "DiagnosisResult",
    "MarketPrice",
    "WeatherSnapshot",
    "fallback_snapshot",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    "mask_phone",
]
