"""Services package."""

from anthaathi.services.auth import OtpRejectedError, OtpServiceInterface, SimulatedOtpService
from anthaathi.services.chat import CannedChatService, ChatServiceInterface
from anthaathi.services.diagnosis import DiagnosisServiceInterface, MockDiagnosisService
from anthaathi.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from anthaathi.services.weather import WeatherService, WeatherUnavailableError

__all__ = [
    # Auth services
    "OtpRejectedError",
    "OtpServiceInterface",
    "SimulatedOtpService",
    # Advisory services
    "CannedChatService",
    "ChatServiceInterface",
    "DiagnosisServiceInterface",
    "MockDiagnosisService",
    "WeatherService",
    "WeatherUnavailableError",
    # Storage services
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
