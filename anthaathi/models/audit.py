"""
Audit Models for Anthaathi

Every user-visible action in the app is logged as an audit event.
This provides:
1. Traceability of what happened on the device
2. Debugging information when things go wrong
3. A clear record of when sample data was shown instead of live data

DESIGN DECISION: Audit events go to the structured log only.
The on-device storage holds exactly the user, language and expenses keys.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Authentication
    OTP_REQUESTED = "otp_requested"
    OTP_VERIFIED = "otp_verified"
    USER_LOGGED_IN = "user_logged_in"
    USER_LOGGED_OUT = "user_logged_out"
    PROFILE_UPDATED = "profile_updated"

    # Preferences
    LANGUAGE_CHANGED = "language_changed"

    # Ledger
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"

    # Input checks
    VALIDATION_FAILED = "validation_failed"

    # Advisory features
    WEATHER_FETCHED = "weather_fetched"
    WEATHER_FALLBACK_USED = "weather_fallback_used"
    DIAGNOSIS_COMPLETED = "diagnosis_completed"
    CHAT_REPLIED = "chat_replied"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (device local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'user', 'expense', 'weather')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


def mask_phone(phone: str) -> str:
    """Keep only the last four digits of a phone number for logs."""
    if len(phone) <= 4:
        return "*" * len(phone)
    return "*" * (len(phone) - 4) + phone[-4:]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.user_logged_in(uid, phone)
        event = AuditEventBuilder.expense_added(expense_id, title, amount, category)
    """

    @staticmethod
    def otp_requested(phone: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OTP_REQUESTED,
            entity_type="user",
            description="OTP requested",
            details={"phone": mask_phone(phone)},
            is_user_action=True,
        )

    @staticmethod
    def otp_verified(phone: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OTP_VERIFIED,
            entity_type="user",
            description="OTP verified",
            details={"phone": mask_phone(phone)},
            is_user_action=True,
        )

    @staticmethod
    def user_logged_in(uid: str, phone: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_IN,
            entity_type="user",
            entity_id=uid,
            description="New session created",
            details={"phone": mask_phone(phone)},
            is_user_action=True,
        )

    @staticmethod
    def user_logged_out(uid: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_OUT,
            entity_type="user",
            entity_id=uid,
            description="Session removed",
            is_user_action=True,
        )

    @staticmethod
    def profile_updated(uid: str, fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFILE_UPDATED,
            entity_type="user",
            entity_id=uid,
            description=f"Profile updated: {', '.join(fields) or 'no fields'}",
            details={"fields": fields},
            is_user_action=True,
        )

    @staticmethod
    def language_changed(previous: str, current: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LANGUAGE_CHANGED,
            entity_type="preference",
            description=f"Language changed from {previous} to {current}",
            details={"previous": previous, "current": current},
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        expense_id: str,
        title: str,
        amount: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {title} - ₹{amount}",
            details={
                "title": title,
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted" if found else "Delete requested for unknown expense",
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(form: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="form",
            entity_id=form,
            description=f"Validation of {form} failed with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def weather_fetched(city: str, location: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WEATHER_FETCHED,
            entity_type="weather",
            entity_id=city,
            description=f"Live weather fetched for {location}",
        )

    @staticmethod
    def weather_fallback_used(city: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WEATHER_FALLBACK_USED,
            severity=AuditSeverity.WARNING,
            entity_type="weather",
            entity_id=city,
            description="Weather fetch failed, showing sample reading",
            error_message=error_message,
        )

    @staticmethod
    def diagnosis_completed(disease: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DIAGNOSIS_COMPLETED,
            entity_type="diagnosis",
            description=f"Diagnosis completed: {disease}",
            details={"disease": disease},
            is_user_action=True,
        )

    @staticmethod
    def chat_replied(message_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CHAT_REPLIED,
            entity_type="chat",
            entity_id=message_id,
            description="Assistant replied",
        )

    @staticmethod
    def storage_error(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Storage error on key '{key}'",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
