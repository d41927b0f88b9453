"""
Session-gated navigation.

DESIGN DECISION: Navigation is an explicit state machine rather than
free-form routing. Every screen change goes through a named
transition, and any transition not listed below raises
NavigationError instead of silently landing somewhere odd:

    splash   --launch-->             home (session) | login (no session)
    login    --login_succeeded-->    language
    language --language_confirmed--> home
    home     --open(feature)-->      feature
    feature  --back-->               home
    any authenticated screen --logged_out--> login

Login always passes through language selection, even for returning
users who already picked one.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

import structlog

from anthaathi.config import get_settings
from anthaathi.stores.session_store import SessionStore


logger = structlog.get_logger(__name__)


class Screen(str, Enum):
    SPLASH = "splash"
    LOGIN = "login"
    LANGUAGE = "language"
    HOME = "home"
    WEATHER = "weather"
    PEST = "pest"
    CHAT = "chat"
    MARKET = "market"
    EXPENSES = "expenses"
    PROFILE = "profile"


FEATURE_SCREENS = frozenset({
    Screen.WEATHER,
    Screen.PEST,
    Screen.CHAT,
    Screen.MARKET,
    Screen.EXPENSES,
    Screen.PROFILE,
})

AUTHENTICATED_SCREENS = FEATURE_SCREENS | {Screen.LANGUAGE, Screen.HOME}


class NavigationError(Exception):
    """A screen change that the navigation graph does not allow."""

    def __init__(self, current: Screen, action: str, message: Optional[str] = None):
        self.current = current
        self.action = action
        super().__init__(message or f"Cannot {action} from the {current.value} screen")


class Navigator:
    """Tracks the current screen and enforces the allowed transitions."""

    def __init__(
        self,
        session_store: SessionStore,
        splash_delay: Optional[float] = None,
    ):
        self._session = session_store
        self._splash_delay = (
            get_settings().app.splash_delay_seconds if splash_delay is None else splash_delay
        )
        self._current = Screen.SPLASH
        self._listeners: list[Callable[[Screen], None]] = []

    @property
    def current(self) -> Screen:
        return self._current

    def subscribe(self, listener: Callable[[Screen], None]) -> Callable[[], None]:
        """Call `listener(screen)` after every screen change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _require(self, action: str, *allowed: Screen) -> None:
        if self._current not in allowed:
            raise NavigationError(self._current, action)

    def _go(self, screen: Screen) -> Screen:
        logger.debug("navigate", source=self._current.value, target=screen.value)
        self._current = screen
        for listener in list(self._listeners):
            listener(screen)
        return screen

    async def launch(self) -> Screen:
        """Restore the session, hold the splash screen, then route on whether one exists."""
        self._require("launch", Screen.SPLASH)
        await self._session.load()
        await asyncio.sleep(self._splash_delay)
        return self._go(Screen.HOME if self._session.is_authenticated else Screen.LOGIN)

    def login_succeeded(self) -> Screen:
        self._require("complete login", Screen.LOGIN)
        if not self._session.is_authenticated:
            raise NavigationError(self._current, "complete login", "No session after login")
        return self._go(Screen.LANGUAGE)

    def language_confirmed(self) -> Screen:
        self._require("confirm language", Screen.LANGUAGE)
        return self._go(Screen.HOME)

    def open(self, screen: Screen) -> Screen:
        """Open a feature screen from home."""
        screen = Screen(screen)
        if screen not in FEATURE_SCREENS:
            raise NavigationError(self._current, f"open {screen.value}")
        self._require(f"open {screen.value}", Screen.HOME)
        return self._go(screen)

    def back(self) -> Screen:
        """Return from a feature screen to home."""
        self._require("go back", *FEATURE_SCREENS)
        return self._go(Screen.HOME)

    def logged_out(self) -> Screen:
        self._require("log out", *AUTHENTICATED_SCREENS)
        if self._session.is_authenticated:
            raise NavigationError(self._current, "log out", "Session still active")
        return self._go(Screen.LOGIN)
