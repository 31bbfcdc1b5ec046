"""
Support Triage - AI answers for support chat, plus the human-escalation heuristic.

The escalation check is a pure OR of three tests:
- the user's message mentions a complex-issue keyword
- the assistant's reply sounds uncertain
- the user's message is longer than LONG_MESSAGE_CHARS

The provider is held as a tagged state, Unconfigured or Ready(provider), so
"no credential" and "call failed" are different errors.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from core.schemas import ChatReply, ChatTurn

logger = logging.getLogger("support")

LONG_MESSAGE_CHARS = 200

COMPLEX_ISSUE_KEYWORDS = [
    "bug", "broken", "not working", "error", "problem", "can't access",
    "payment failed", "refund", "cancel subscription", "security", "hacked",
    "compromised", "contact", "speak to human", "real person", "agent",
]

UNCERTAINTY_PHRASES = [
    "i'm not sure", "i don't know", "i cannot", "i can't",
    "beyond my capabilities", "human agent", "support team",
    "cannot assist", "unable to help", "need more information",
]

SYSTEM_PROMPT = (
    "You are a helpful support assistant for CosmicLink, a web proxy service. "
    "Provide concise and accurate answers to user questions about premium features, "
    "account management, and technical issues. If you are unsure or the question "
    "requires human intervention, suggest escalating to a human support agent."
)

FALLBACK_REPLY = (
    "I apologize, but I am having trouble processing your request. "
    "Please try again or contact a human support agent."
)


class SupportError(Exception):
    pass


class ProviderNotConfiguredError(SupportError):
    def __init__(self, message: str = "AI support is not configured. Please provide a valid API key."):
        super().__init__(message)


class ProviderUnavailableError(SupportError):
    def __init__(self, message: str = "Failed to process message with AI. Please try again later."):
        super().__init__(message)


def should_escalate(user_message: str, assistant_message: str) -> bool:
    user_lower = user_message.lower()
    assistant_lower = assistant_message.lower()

    has_complex_issue = any(keyword in user_lower for keyword in COMPLEX_ISSUE_KEYWORDS)
    sounds_uncertain = any(phrase in assistant_lower for phrase in UNCERTAINTY_PHRASES)
    is_long = len(user_message) > LONG_MESSAGE_CHARS

    return has_complex_issue or sounds_uncertain or is_long


@dataclass(frozen=True)
class Unconfigured:
    reason: str = "no credential"


@dataclass(frozen=True)
class Ready:
    provider: Any


ProviderState = Union[Unconfigured, Ready]


class SupportTriage:
    def __init__(self, provider=None, model_config: Optional[dict] = None):
        config = model_config or {}
        self.max_tokens = config.get("max_tokens", 500)
        self.temperature = config.get("temperature", 0.7)
        self.model = config.get("model", "gemini-2.5-flash")
        self.state: ProviderState = Ready(provider) if provider is not None else Unconfigured()

    @classmethod
    def from_config(cls, model_config: dict) -> "SupportTriage":
        """Build from the service configuration and environment."""
        triage = cls(model_config=model_config)
        if model_config.get("provider") == "ollama":
            from config.settings_loader import get_ollama_url, get_timeout
            from core.model_manager import OllamaChatProvider
            triage.state = Ready(OllamaChatProvider(get_ollama_url("chat"), triage.model, get_timeout()))
        else:
            api_key = os.environ.get("GEMINI_API_KEY", "")
            if api_key:
                triage.configure(api_key)
        return triage

    def configure(self, api_key: str) -> bool:
        """Configure the Gemini provider. Returns whether the triage is now ready."""
        from core.model_manager import GeminiChatProvider
        try:
            self.state = Ready(GeminiChatProvider(api_key=api_key, model=self.model))
            logger.info("AI support configured")
        except Exception as e:
            logger.error(f"❌ Error configuring AI support: {e}")
            self.state = Unconfigured(reason=str(e))
        return self.is_ready()

    def is_ready(self) -> bool:
        return isinstance(self.state, Ready)

    def evaluate(self, user_message: str, assistant_message: str) -> bool:
        return should_escalate(user_message, assistant_message)

    def build_turns(self, message: str, previous: Optional[List[ChatTurn]] = None) -> List[ChatTurn]:
        return [
            ChatTurn(role="system", content=SYSTEM_PROMPT),
            *(previous or []),
            ChatTurn(role="user", content=message),
        ]

    async def process_chat_message(self, message: str, previous: Optional[List[ChatTurn]] = None) -> ChatReply:
        if not isinstance(self.state, Ready):
            raise ProviderNotConfiguredError()

        turns = self.build_turns(message, previous)
        try:
            content = await self.state.provider.complete(
                turns, max_tokens=self.max_tokens, temperature=self.temperature
            )
        except Exception as e:
            logger.error(f"❌ Error processing message with AI: {e}")
            raise ProviderUnavailableError() from e

        reply = (content or "").strip() or FALLBACK_REPLY
        return ChatReply(message=reply, shouldEscalate=self.evaluate(message, reply))
