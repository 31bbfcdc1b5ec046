import asyncio
from typing import List, Optional

import aiohttp
from google import genai
from google.genai import types

from core.schemas import ChatTurn


class GeminiChatProvider:
    """Chat completion against Gemini through the google-genai SDK."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        self.model = model
        self.client = genai.Client(api_key=api_key)

    async def complete(self, turns: List[ChatTurn], max_tokens: int = 500, temperature: float = 0.7) -> Optional[str]:
        # Gemini takes the system turn as a config field and calls the assistant "model"
        system = "\n\n".join(t.content for t in turns if t.role == "system") or None
        contents = [
            types.Content(
                role="model" if t.role == "assistant" else "user",
                parts=[types.Part(text=t.content)],
            )
            for t in turns
            if t.role != "system"
        ]

        # Use synchronous SDK client in thread, same as the rest of the backend
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=system,
                max_output_tokens=max_tokens,
                temperature=temperature,
            ),
        )
        return (response.text or "").strip() or None


class OllamaChatProvider:
    """Chat completion against a local Ollama instance (no credential needed)."""

    def __init__(self, chat_url: str, model: str, timeout: float = 120):
        self.chat_url = chat_url
        self.model = model
        self.timeout = timeout

    async def complete(self, turns: List[ChatTurn], max_tokens: int = 500, temperature: float = 0.7) -> Optional[str]:
        payload = {
            "model": self.model,
            "messages": [t.model_dump() for t in turns],
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            async with session.post(self.chat_url, json=payload) as response:
                response.raise_for_status()
                result = await response.json()
        content = (result.get("message") or {}).get("content")
        return (content or "").strip() or None
