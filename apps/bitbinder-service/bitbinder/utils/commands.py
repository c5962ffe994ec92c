"""
Text heuristics used by the jokebook and the assistant.

- parse_jokebook_command: recognise "add that to my jokebook" style phrases
- guess_folder_from_text: keyword rules behind the built-in auto-organizer
- safe_json_parse: tolerate LLM replies wrapped in Markdown code fences
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_JOKEBOOK_FOLDER = "bitbuddy"
FALLBACK_FOLDER = "Misc"

_ADD_VERB = re.compile(r"(add|save|put|store)\b")
_JOKEBOOK_PHRASE = re.compile(r"(joke\s?book|jokebook|my book|my jokes)")
_FOLDER_PHRASE = re.compile(r"(?:to|in)\s+(?:the\s+)?(\w[\w\s]*?)\s+folder")

# Checked in order; first match wins
_FOLDER_RULES: List[Tuple[str, re.Pattern]] = [
    ("Relationships", re.compile(r"date|love|relationship|marriage|breakup")),
    ("Travel", re.compile(r"travel|airport|flight|hotel|vacation")),
    ("Work", re.compile(r"work|boss|office|meeting|job")),
    ("Family", re.compile(r"family|mom|dad|kids|parents")),
    ("Tech", re.compile(r"tech|phone|app|internet|ai")),
]

_JSON_FENCE = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)
_ANY_FENCE = re.compile(r"```([\s\S]*?)```", re.IGNORECASE)


def parse_jokebook_command(utterance: Optional[str]) -> Optional[Dict[str, str]]:
    """Return ``{"folder": name}`` when the utterance asks to file a joke, else None."""
    lower = (utterance or "").lower()
    if not (_ADD_VERB.search(lower) and _JOKEBOOK_PHRASE.search(lower)):
        return None

    folder = DEFAULT_JOKEBOOK_FOLDER
    match = _FOLDER_PHRASE.search(lower)
    if match:
        folder = match.group(1).strip()
    return {"folder": folder}


def guess_folder_from_text(text: Optional[str]) -> str:
    t = (text or "").lower()
    for folder, pattern in _FOLDER_RULES:
        if pattern.search(t):
            return folder
    return FALLBACK_FOLDER


def safe_json_parse(text: Optional[str]) -> Any:
    """Parse JSON directly, then from a ```json fence, then from any fence."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        pass
    match = _JSON_FENCE.search(text) or _ANY_FENCE.search(text)
    if match:
        try:
            return json.loads(match.group(1).strip())
        except ValueError:
            return None
    return None


def normalize_folder_name(folder: Optional[str], default: str = DEFAULT_JOKEBOOK_FOLDER) -> str:
    cleaned = (folder or "").strip()
    return cleaned or default
