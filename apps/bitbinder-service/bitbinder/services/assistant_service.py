"""Comedy assistant: OpenAI chat-completions with built-in fallback engines."""
from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import requests

from bitbinder.utils.commands import guess_folder_from_text, safe_json_parse
from bitbinder.utils.feature_flags import llm_features_enabled

logger = logging.getLogger(__name__)

ENGINE_OPENAI = "openai"
ENGINE_BUILT_IN = "built-in"

CHAT_SYSTEM_PROMPT = (
    "You are BitBuddy, a funny clown comedy assistant. You help comedians write jokes, "
    "brainstorm material, and give feedback on bits. Keep answers concise and witty. "
    "Use humor when appropriate."
)

CANNED_CHAT_REPLIES = (
    "Add your OpenAI key in Settings to unlock my full brain! 🧠",
    "I'm funnier with an API key... hint hint! 🤡",
    "My comedy circuits need an API key to boot up! ⚡",
    "Set up an OpenAI key in ⚙️ Settings and I'll be your writing partner!",
)

# Conversation (system prompt included) longer than this is cut back
CHAT_HISTORY_LIMIT = 20
CHAT_HISTORY_KEEP = 10

_GENERATE_TEMPERATURE = 0.8
_CHAT_TEMPERATURE = 0.9
_CHAT_MAX_TOKENS = 300


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class AssistantError(RuntimeError):
    """Raised when the upstream LLM call fails."""


@dataclass(frozen=True)
class AssistantConfig:
    api_base: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    timeout_seconds: float = 30.0
    server_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AssistantConfig":
        return cls(
            api_base=(os.getenv("OPENAI_API_BASE") or cls.api_base).rstrip("/"),
            model=os.getenv("OPENAI_MODEL") or cls.model,
            timeout_seconds=_env_float("OPENAI_TIMEOUT_SECONDS", cls.timeout_seconds),
            server_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
        )


def mask_api_key(key: Optional[str]) -> str:
    if not key:
        return ""
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:3]}...{key[-4:]}"


def fallback_jokes(topic: str, style: str) -> List[Dict[str, str]]:
    base = f"({style}) {topic}"
    return [
        {"title": f"{base} #1", "text": f"So I've been thinking about {topic}... Turns out {topic} thinks about me too."},
        {"title": f"{base} #2", "text": f"The wild thing about {topic} is... it makes me look organized by comparison."},
        {"title": f"{base} #3", "text": f"I tried to fix my {topic} problem... Now it has my number."},
    ]


def joke_text(item: Dict[str, Any], separator: str = "\n\n") -> str:
    """Full joke text; setup/punchline pairs are joined when ``text`` is absent."""
    text = item.get("text")
    if isinstance(text, str) and text.strip():
        return text
    parts = [item.get("setup"), item.get("punchline")]
    return separator.join(str(p) for p in parts if p)


def normalize_generated(items: Iterable[Any]) -> List[Dict[str, str]]:
    jokes: List[Dict[str, str]] = []
    for idx, item in enumerate(items, start=1):
        if isinstance(item, str):
            item = {"text": item}
        if not isinstance(item, dict):
            continue
        text = joke_text(item)
        if not text:
            continue
        title = str(item.get("title") or "").strip() or f"Joke {idx}"
        jokes.append({"title": title, "text": text})
    return jokes


def needs_history_trim(message_count: int) -> bool:
    """True when system prompt plus ``message_count`` stored messages is too long."""
    return message_count + 1 > CHAT_HISTORY_LIMIT


class AssistantService:
    """Wraps the chat-completions endpoint and the offline fallbacks."""

    def __init__(self, config: Optional[AssistantConfig] = None) -> None:
        self.config = config or AssistantConfig.from_env()

    def resolve_api_key(self, user_key: Optional[str]) -> Optional[str]:
        """User key first, then the server key; None when LLM features are off."""
        if not llm_features_enabled():
            return None
        return (user_key or "").strip() or self.config.server_api_key

    def engine_for(self, user_key: Optional[str]) -> str:
        return ENGINE_OPENAI if self.resolve_api_key(user_key) else ENGINE_BUILT_IN

    def call_openai(
        self,
        messages: Sequence[Dict[str, str]],
        api_key: str,
        *,
        temperature: float = _GENERATE_TEMPERATURE,
        max_tokens: Optional[int] = None,
    ) -> str:
        payload: Dict[str, Any] = {
            "model": self.config.model,
            "messages": list(messages),
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.post(
                f"{self.config.api_base}/chat/completions",
                headers=headers,
                json=payload,
                timeout=(3, self.config.timeout_seconds),
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise AssistantError("OpenAI request failed") from exc
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            return ""

    def generate_jokes(self, topic: str, style: str, user_key: Optional[str]) -> Tuple[str, List[Dict[str, str]]]:
        topic = (topic or "").strip()
        if not topic:
            raise ValueError("Add a topic or premise first.")
        style = (style or "").strip() or "observational"
        key = self.resolve_api_key(user_key)
        if key:
            prompt = (
                'You are a comedy writing assistant. Return a JSON array of 3 jokes. Each object should have '
                f'"title" (short name) and "text" (the full joke). Topic: "{topic}". Style: "{style}".'
            )
            try:
                content = self.call_openai([{"role": "user", "content": prompt}], key)
                data = safe_json_parse(content)
                if isinstance(data, list):
                    jokes = normalize_generated(data)
                    if jokes:
                        return ENGINE_OPENAI, jokes
                logger.warning("LLM joke generation returned no usable array; using built-in jokes")
            except AssistantError as exc:
                logger.warning("LLM joke generation failed: %s", exc)
        return ENGINE_BUILT_IN, fallback_jokes(topic, style)

    def organize(self, jokes: Sequence[Any], user_key: Optional[str]) -> Tuple[str, List[Tuple[Any, str]]]:
        """Return (engine, [(joke_id, folder_name)]) for the given joke rows."""
        if not jokes:
            raise ValueError("Add a few jokes first.")
        key = self.resolve_api_key(user_key)
        if key:
            payload = [{"id": str(j.id), "title": j.title, "text": j.text or ""} for j in jokes]
            prompt = (
                "You are organizing jokes into folders. Return JSON array of objects with id and folder. "
                f"Use 3-6 folder names. Data: {json.dumps(payload)}"
            )
            try:
                data = safe_json_parse(self.call_openai([{"role": "user", "content": prompt}], key))
                if isinstance(data, list):
                    known = {str(j.id): j.id for j in jokes}
                    assignments = [
                        (known[str(a.get("id"))], str(a.get("folder") or ""))
                        for a in data
                        if isinstance(a, dict) and str(a.get("id")) in known
                    ]
                    return ENGINE_OPENAI, assignments
                logger.warning("LLM organize returned no usable array; using built-in rules")
            except AssistantError as exc:
                logger.warning("LLM organize failed: %s", exc)
        return ENGINE_BUILT_IN, [
            (j.id, guess_folder_from_text(f"{j.title} {j.text or ''}")) for j in jokes
        ]

    def chat_reply(
        self,
        history: Sequence[Dict[str, str]],
        message: str,
        user_key: Optional[str],
    ) -> Tuple[str, str]:
        """Return (engine, reply) for ``message`` following ``history``."""
        key = self.resolve_api_key(user_key)
        if key:
            messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}, *history, {"role": "user", "content": message}]
            try:
                reply = self.call_openai(messages, key, temperature=_CHAT_TEMPERATURE, max_tokens=_CHAT_MAX_TOKENS)
                if reply:
                    return ENGINE_OPENAI, reply
            except AssistantError as exc:
                logger.warning("LLM chat failed: %s", exc)
        return ENGINE_BUILT_IN, random.choice(CANNED_CHAT_REPLIES)


_assistant_service: Optional[AssistantService] = None


def get_assistant_service() -> AssistantService:
    global _assistant_service
    if _assistant_service is None:
        _assistant_service = AssistantService()
    return _assistant_service


def reset_assistant_service_for_tests() -> None:
    global _assistant_service
    _assistant_service = None
