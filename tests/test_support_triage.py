import asyncio

import pytest

from core.model_manager import GeminiChatProvider, OllamaChatProvider
from core.schemas import ChatTurn
from core.support_triage import (
    FALLBACK_REPLY,
    SYSTEM_PROMPT,
    ProviderNotConfiguredError,
    ProviderUnavailableError,
    Ready,
    SupportTriage,
    Unconfigured,
    should_escalate,
)


class FakeProvider:
    def __init__(self, reply="Happy to help with that.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, turns, max_tokens=500, temperature=0.7):
        self.calls.append({"turns": turns, "max_tokens": max_tokens, "temperature": temperature})
        if self.error:
            raise self.error
        return self.reply


# --- escalation heuristic ---

def test_user_keyword_escalates_regardless_of_reply():
    assert should_escalate("I was hacked", "Here is how to fix your password") is True


def test_keywords_are_case_insensitive():
    assert should_escalate("I want a REFUND", "Sure") is True
    assert should_escalate("Please let me Speak To Human", "ok") is True


def test_uncertain_reply_escalates():
    assert should_escalate("What colors are available?", "I don't know, sorry.") is True
    assert should_escalate("Hi", "Let me connect you with a Human Agent.") is True


def test_long_message_escalates():
    assert should_escalate("a" * 250, "ok") is True


def test_exactly_limit_length_does_not_escalate():
    assert should_escalate("a" * 200, "ok") is False


def test_plain_exchange_does_not_escalate():
    assert should_escalate("How do I change the theme?", "Open Settings and pick a theme.") is False


# --- provider state ---

def test_unconfigured_by_default():
    triage = SupportTriage()
    assert isinstance(triage.state, Unconfigured)
    assert triage.is_ready() is False


def test_ready_with_provider():
    triage = SupportTriage(provider=FakeProvider())
    assert isinstance(triage.state, Ready)
    assert triage.is_ready() is True


def test_from_config_without_key_is_unconfigured(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert SupportTriage.from_config({"provider": "gemini"}).is_ready() is False


def test_from_config_with_key_is_ready(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    triage = SupportTriage.from_config({"provider": "gemini", "model": "gemini-2.5-flash"})

    assert isinstance(triage.state.provider, GeminiChatProvider)
    assert triage.state.provider.model == "gemini-2.5-flash"


def test_from_config_ollama_needs_no_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    triage = SupportTriage.from_config({"provider": "ollama", "model": "llama3"})

    provider = triage.state.provider
    assert isinstance(provider, OllamaChatProvider)
    assert provider.chat_url == "http://127.0.0.1:11434/api/chat"
    assert provider.model == "llama3"
    assert provider.timeout == 120


def test_configure_moves_to_ready():
    triage = SupportTriage(model_config={"model": "gemini-test"})
    assert triage.configure("test-key") is True
    assert isinstance(triage.state, Ready)
    assert triage.state.provider.model == "gemini-test"


def test_configure_failure_stays_unconfigured(monkeypatch):
    class BrokenProvider:
        def __init__(self, **kwargs):
            raise ValueError("invalid key")

    monkeypatch.setattr("core.model_manager.GeminiChatProvider", BrokenProvider)
    triage = SupportTriage()

    assert triage.configure("bad-key") is False
    assert triage.state == Unconfigured(reason="invalid key")


def test_unconfigured_call_fails_without_calling_out():
    with pytest.raises(ProviderNotConfiguredError):
        asyncio.run(SupportTriage().process_chat_message("hello"))


# --- chat turns ---

def test_request_has_system_history_and_user_turns():
    provider = FakeProvider()
    triage = SupportTriage(provider=provider, model_config={"max_tokens": 321, "temperature": 0.2})
    history = [
        ChatTurn(role="user", content="Hi"),
        ChatTurn(role="assistant", content="Hello! How can I help?"),
    ]

    reply = asyncio.run(triage.process_chat_message("How do I cloak my tab?", history))

    call = provider.calls[0]
    assert [t.role for t in call["turns"]] == ["system", "user", "assistant", "user"]
    assert call["turns"][0].content == SYSTEM_PROMPT
    assert call["turns"][-1].content == "How do I cloak my tab?"
    assert call["max_tokens"] == 321
    assert call["temperature"] == 0.2
    assert reply.message == "Happy to help with that."
    assert reply.shouldEscalate is False


def test_reply_is_triaged():
    triage = SupportTriage(provider=FakeProvider(reply="I'm not sure about that."))
    reply = asyncio.run(triage.process_chat_message("Which plan is best?"))
    assert reply.shouldEscalate is True


@pytest.mark.parametrize("empty", [None, "", "  \n "])
def test_empty_provider_reply_uses_fallback(empty):
    triage = SupportTriage(provider=FakeProvider(reply=empty))
    reply = asyncio.run(triage.process_chat_message("hello"))

    assert reply.message == FALLBACK_REPLY
    assert reply.shouldEscalate is False


def test_provider_failure_is_reported_as_unavailable():
    triage = SupportTriage(provider=FakeProvider(error=ConnectionError("rate limited")))

    with pytest.raises(ProviderUnavailableError) as excinfo:
        asyncio.run(triage.process_chat_message("hello"))

    assert "try again later" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ConnectionError)
