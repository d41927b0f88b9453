"""
Audit Logger

DESIGN DECISION: Every user-visible action in the app is logged.
This provides:
1. Traceability of logins, profile edits and ledger changes
2. Debugging capability
3. A record of every time sample weather was shown instead of live data

The audit logger:
- Is async so stores can await it alongside their storage calls
- Keeps a short in-memory history for the profile screen
- Writes structured JSON lines through structlog
"""

from typing import Optional

import structlog

from anthaathi.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Also remembers the events it logged in this run so the
    profile screen (and tests) can show recent activity.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("anthaathi.audit")
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Events logged in this run, newest first."""
        return list(reversed(self._history))

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally; there is no persistent audit store, so
        this returns True once the event is written to the log.
        """
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[0]

        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return True

    async def log_otp_requested(self, phone: str) -> None:
        await self.log(AuditEventBuilder.otp_requested(phone))

    async def log_otp_verified(self, phone: str) -> None:
        await self.log(AuditEventBuilder.otp_verified(phone))

    async def log_user_logged_in(self, uid: str, phone: str) -> None:
        """Log creation of a new session."""
        await self.log(AuditEventBuilder.user_logged_in(uid, phone))

    async def log_user_logged_out(self, uid: Optional[str]) -> None:
        await self.log(AuditEventBuilder.user_logged_out(uid))

    async def log_profile_updated(self, uid: str, fields: list[str]) -> None:
        await self.log(AuditEventBuilder.profile_updated(uid, fields))

    async def log_language_changed(self, previous: str, current: str) -> None:
        await self.log(AuditEventBuilder.language_changed(previous, current))

    async def log_expense_added(
        self,
        expense_id: str,
        title: str,
        amount: str,
        category: str,
    ) -> None:
        """Log a new ledger entry."""
        await self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            title=title,
            amount=amount,
            category=category,
        ))

    async def log_expense_deleted(self, expense_id: str, found: bool) -> None:
        await self.log(AuditEventBuilder.expense_deleted(expense_id, found))

    async def log_validation_failed(self, form: str, issues: list[dict]) -> None:
        """Log rejected user input."""
        await self.log(AuditEventBuilder.validation_failed(form, issues))

    async def log_weather_fetched(self, city: str, location: str) -> None:
        await self.log(AuditEventBuilder.weather_fetched(city, location))

    async def log_weather_fallback(self, city: str, error_message: str) -> None:
        """Log that the fixed sample reading replaced a live one."""
        await self.log(AuditEventBuilder.weather_fallback_used(city, error_message))

    async def log_diagnosis_completed(self, disease: str) -> None:
        await self.log(AuditEventBuilder.diagnosis_completed(disease))

    async def log_chat_replied(self, message_id: str) -> None:
        await self.log(AuditEventBuilder.chat_replied(message_id))

    async def log_storage_error(self, key: str, error_message: str) -> None:
        await self.log(AuditEventBuilder.storage_error(key, error_message))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
