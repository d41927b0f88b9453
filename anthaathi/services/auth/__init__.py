"""Authentication services package."""

from anthaathi.services.auth.otp_service import (
    OtpRejectedError,
    OtpServiceInterface,
    SimulatedOtpService,
)

__all__ = [
    "OtpRejectedError",
    "OtpServiceInterface",
    "SimulatedOtpService",
]
