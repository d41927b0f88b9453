"""
Main Orchestrator for Anthaathi

This module ties the stores, services and navigator together and
defines the flows that span more than one of them:
1. Startup (restore stores → splash → home or login)
2. Login (phone → OTP → session → language selection)
3. Language change (language store → session mirror)
4. Logout (session removed → login screen)

DESIGN DECISION: Every component is built once here and passed to the
views. Nothing reaches for a module-level singleton, so tests build a
complete app on in-memory storage with zero delays.

DESIGN DECISION: The language store owns the language. The copy in
the session record is only ever written by `AppComponents.set_language`
(and at login), so the two can never drift apart.
"""

import random
from typing import Optional

import httpx
import structlog

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.models.profile import Language, ProfileUpdate, UserProfile
from anthaathi.navigation import Navigator, Screen
from anthaathi.services.auth import (
    OtpRejectedError,
    OtpServiceInterface,
    SimulatedOtpService,
)
from anthaathi.services.chat import CannedChatService, ChatServiceInterface
from anthaathi.services.diagnosis import DiagnosisServiceInterface, MockDiagnosisService
from anthaathi.services.storage import JsonFileStorage, KeyValueStorageInterface
from anthaathi.services.weather import WeatherService
from anthaathi.stores import ExpenseStore, LanguageStore, SessionStore
from anthaathi.validation import InputValidator


logger = structlog.get_logger(__name__)


class LoginFlow:
    """
    Orchestrates phone login.

    Flow:
    1. request_otp → validate phone, send code
    2. verify → validate code, create session, go to language selection

    A new session always starts with the current language preference.
    """

    def __init__(
        self,
        otp_service: OtpServiceInterface,
        session_store: SessionStore,
        language_store: LanguageStore,
        navigator: Navigator,
    ):
        self._otp = otp_service
        self._session = session_store
        self._language = language_store
        self._navigator = navigator

    async def request_otp(self, phone: str) -> None:
        """
        Raises:
            InputValidationError: If the phone number is malformed
        """
        await self._otp.send_otp(phone.strip())

    async def verify(self, phone: str, code: str) -> UserProfile:
        """
        Check the code and start the session.

        Returns:
            The new session record

        Raises:
            InputValidationError: If phone or code is malformed
            OtpRejectedError: If the code is not accepted
        """
        phone = phone.strip()
        if not await self._otp.verify_otp(phone, code.strip()):
            raise OtpRejectedError("The OTP you entered is incorrect")

        user = await self._session.login(phone, language=self._language.language)
        self._navigator.login_succeeded()
        return user


class AppComponents:
    """Everything a view needs, built once per app run."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: AuditLogger,
        session: SessionStore,
        language: LanguageStore,
        expenses: ExpenseStore,
        navigator: Navigator,
        login_flow: LoginFlow,
        weather: WeatherService,
        diagnosis: DiagnosisServiceInterface,
        chat: ChatServiceInterface,
    ):
        self.storage = storage
        self.audit_logger = audit_logger
        self.session = session
        self.language = language
        self.expenses = expenses
        self.navigator = navigator
        self.login_flow = login_flow
        self.weather = weather
        self.diagnosis = diagnosis
        self.chat = chat

    async def start(self) -> Screen:
        """Restore all persisted state and leave the splash screen."""
        await self.language.load()
        await self.expenses.load()
        screen = await self.navigator.launch()

        # A session written by an older build may disagree with the
        # language key; the language store wins.
        user = self.session.user
        if user is not None and user.language != self.language.language:
            await self.session.update_profile(language=self.language.language)

        logger.info("app_started", screen=screen.value)
        return screen

    async def set_language(self, code) -> Language:
        """
        Change the language and mirror it into the session record.

        Raises:
            ValueError: If the code is not a supported language
        """
        language = await self.language.set_language(code)
        await self.session.update_profile(language=language)
        return language

    async def save_profile(self, name: str, location: str) -> Optional[UserProfile]:
        """Merge edited name and location into the session record."""
        return await self.session.update_profile(
            ProfileUpdate(name=name, location=location)
        )

    async def logout(self) -> Screen:
        await self.session.logout()
        return self.navigator.logged_out()


def create_app_components(
    storage: Optional[KeyValueStorageInterface] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    rng: Optional[random.Random] = None,
    instant: bool = False,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        storage: Key-value storage; defaults to the JSON file from settings
        http_client: Shared client for the weather service
        rng: Random source for the chat assistant
        instant: Skip every simulated delay (tests)

    Returns:
        Fully wired AppComponents
    """
    app_settings = get_settings().app
    storage = storage or JsonFileStorage()
    audit_logger = AuditLogger()
    validator = InputValidator()

    def delay(seconds: float) -> float:
        return 0.0 if instant else seconds

    session = SessionStore(storage, audit_logger=audit_logger)
    language = LanguageStore(storage, audit_logger=audit_logger)
    expenses = ExpenseStore(storage, validator=validator, audit_logger=audit_logger)
    navigator = Navigator(session, splash_delay=delay(app_settings.splash_delay_seconds))

    otp_service = SimulatedOtpService(
        send_delay=delay(app_settings.otp_send_delay_seconds),
        verify_delay=delay(app_settings.otp_verify_delay_seconds),
        validator=validator,
        audit_logger=audit_logger,
    )

    return AppComponents(
        storage=storage,
        audit_logger=audit_logger,
        session=session,
        language=language,
        expenses=expenses,
        navigator=navigator,
        login_flow=LoginFlow(otp_service, session, language, navigator),
        weather=WeatherService(http_client=http_client, audit_logger=audit_logger),
        diagnosis=MockDiagnosisService(
            delay=delay(app_settings.diagnosis_delay_seconds),
            audit_logger=audit_logger,
        ),
        chat=CannedChatService(
            rng=rng,
            delay=delay(app_settings.chat_reply_delay_seconds),
            audit_logger=audit_logger,
        ),
    )
