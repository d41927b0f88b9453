"""Chat services package."""

from anthaathi.services.chat.canned_service import (
    FARMING_RESPONSES,
    WELCOME_TEXT,
    CannedChatService,
    ChatServiceInterface,
)

__all__ = [
    "FARMING_RESPONSES",
    "WELCOME_TEXT",
    "CannedChatService",
    "ChatServiceInterface",
]
