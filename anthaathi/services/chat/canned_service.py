"""
Farming assistant chat.

DESIGN DECISION: The assistant does not call a language model. It
answers every question with one of a few vetted farming tips, so
nothing it says can be made up. The random source is injectable so
tests can pin the answer.
"""

import asyncio
import random
from abc import ABC, abstractmethod
from typing import Optional

from anthaathi.audit import AuditLogger
from anthaathi.config import get_settings
from anthaathi.models.advisory import ChatMessage


WELCOME_TEXT = (
    "Hello! I am UZHAVAN, your AI farming assistant. Ask me anything about "
    "crops, soil, weather, pest management, or farming techniques."
)

FARMING_RESPONSES = (
    "Based on your soil type and region, I recommend using organic compost mixed "
    "with neem cake for better soil health. Apply 2-3 tons per acre before sowing season.",
    "For paddy cultivation during Kharif season, the recommended seed rate is 60-80 kg/ha "
    "for transplanted rice. Ensure proper nursery management for healthy seedlings.",
    "Drip irrigation can save up to 60% water compared to flood irrigation. Consider "
    "installing drip systems for vegetable crops to improve water use efficiency.",
    "The current market trend shows increased demand for organic produce. Consider getting "
    "organic certification which typically takes 3 years of transition period.",
    "For pest management in cotton, use integrated pest management (IPM) approach. Start "
    "with pheromone traps, then neem-based sprays, and chemical pesticides only as last resort.",
    "Crop rotation with legumes like green gram or black gram after cereal crops helps fix "
    "nitrogen naturally and breaks pest cycles. Plan your rotation annually.",
)


class ChatServiceInterface(ABC):
    """Answers farmer questions."""

    @abstractmethod
    def welcome_message(self) -> ChatMessage:
        """The assistant message that opens every conversation."""
        pass

    @abstractmethod
    async def reply(self, text: str) -> Optional[ChatMessage]:
        """
        Answer a question.

        Returns None for blank input.
        """
        pass


class CannedChatService(ChatServiceInterface):
    """Picks one canned answer at random after a short typing delay."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        delay: Optional[float] = None,
        responses: tuple[str, ...] = FARMING_RESPONSES,
        audit_logger: Optional[AuditLogger] = None,
    ):
        if not responses:
            raise ValueError("At least one canned response is required")
        self._rng = rng or random.Random()
        self._delay = get_settings().app.chat_reply_delay_seconds if delay is None else delay
        self._responses = responses
        self._audit_logger = audit_logger

    def welcome_message(self) -> ChatMessage:
        return ChatMessage(id="welcome", text=WELCOME_TEXT, is_user=False)

    async def reply(self, text: str) -> Optional[ChatMessage]:
        if not (text or "").strip():
            return None

        await asyncio.sleep(self._delay)
        message = ChatMessage(text=self._rng.choice(self._responses), is_user=False)

        if self._audit_logger:
            await self._audit_logger.log_chat_replied(message.id)
        return message
