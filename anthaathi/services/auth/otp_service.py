"""
OTP Service

DESIGN DECISION: There is no SMS gateway. The simulated service keeps
the same async shape a real one would have, so the login flow does not
change when a gateway is plugged in:
1. send_otp waits a fixed delay and "sends" nothing
2. verify_otp waits a fixed delay and accepts any well-formed code

Input is still validated; malformed numbers or codes are rejected
before the delay starts.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.validation import InputValidationError, InputValidator


logger = structlog.get_logger(__name__)


class OtpRejectedError(Exception):
    """The code was well-formed but not accepted."""
    pass


class OtpServiceInterface(ABC):
    """Sends and checks one-time passwords."""

    @abstractmethod
    async def send_otp(self, phone: str) -> None:
        """
        Send a code to the phone number.

        Raises:
            InputValidationError: If the phone number is malformed
        """
        pass

    @abstractmethod
    async def verify_otp(self, phone: str, code: str) -> bool:
        """
        Check a code for the phone number.

        Returns True if the code is accepted.

        Raises:
            InputValidationError: If the code is malformed
        """
        pass


class SimulatedOtpService(OtpServiceInterface):
    """Delay-only stand-in for an SMS gateway."""

    def __init__(
        self,
        send_delay: Optional[float] = None,
        verify_delay: Optional[float] = None,
        validator: Optional[InputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        app_settings = get_settings().app
        self._send_delay = (
            app_settings.otp_send_delay_seconds if send_delay is None else send_delay
        )
        self._verify_delay = (
            app_settings.otp_verify_delay_seconds if verify_delay is None else verify_delay
        )
        self._validator = validator or InputValidator()
        self._audit_logger = audit_logger

    async def _reject(self, result) -> None:
        if self._audit_logger:
            await self._audit_logger.log_validation_failed(
                result.form,
                [issue.model_dump() for issue in result.issues],
            )
        raise InputValidationError(result)

    async def send_otp(self, phone: str) -> None:
        result = self._validator.validate_phone(phone)
        if result.has_errors:
            await self._reject(result)

        await asyncio.sleep(self._send_delay)
        logger.info("otp_sent", simulated=True)

        if self._audit_logger:
            await self._audit_logger.log_otp_requested(phone)

    async def verify_otp(self, phone: str, code: str) -> bool:
        for result in (
            self._validator.validate_phone(phone),
            self._validator.validate_otp(code),
        ):
            if result.has_errors:
                await self._reject(result)

        await asyncio.sleep(self._verify_delay)

        if self._audit_logger:
            await self._audit_logger.log_otp_verified(phone)
        return True
