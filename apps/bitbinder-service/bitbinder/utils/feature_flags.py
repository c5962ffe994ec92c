"""
Runtime feature flags for the assistant.

Flags are read from environment variables once and cached; call
``refresh_feature_flag_cache`` after changing the environment.

- LLM_FEATURES_ENABLED: allow OpenAI calls for generation, organizing and
  chat. When off, every assistant operation uses its built-in engine even if
  the user saved an API key.
- FEATURE_CHAT_ENABLED: expose the BitBuddy chat endpoint. When off, posting
  a chat message answers 404; history stays readable and clearable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Literal, Mapping

FeatureFlagKey = Literal["llm_features_enabled", "feature_chat_enabled"]

_FALSY = frozenset({"", "0", "false", "no", "off"})
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class FeatureFlag:
    env_var: str
    default: bool
    description: str

    def read(self, environ: Mapping[str, str]) -> bool:
        return normalize_bool(environ.get(self.env_var), default=self.default)


FEATURE_FLAGS: Dict[FeatureFlagKey, FeatureFlag] = {
    "llm_features_enabled": FeatureFlag(
        "LLM_FEATURES_ENABLED", True, "OpenAI-backed generation, organizing and chat"
    ),
    "feature_chat_enabled": FeatureFlag(
        "FEATURE_CHAT_ENABLED", True, "BitBuddy chat endpoint"
    ),
}


def normalize_bool(value: str | None, default: bool = True) -> bool:
    """Parse an environment-style boolean; unrecognised values give ``default``."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _FALSY:
        return False
    if normalized in _TRUTHY:
        return True
    return default


@lru_cache(maxsize=None)
def get_feature_flags() -> Dict[FeatureFlagKey, bool]:
    return {key: flag.read(os.environ) for key, flag in FEATURE_FLAGS.items()}


def is_feature_enabled(flag: FeatureFlagKey) -> bool:
    return get_feature_flags()[flag]


def llm_features_enabled() -> bool:
    """True unless ``LLM_FEATURES_ENABLED`` is falsy; gates every OpenAI request."""
    return is_feature_enabled("llm_features_enabled")


def chat_feature_enabled() -> bool:
    """True unless ``FEATURE_CHAT_ENABLED`` is falsy; gates ``POST /assistant/chat``."""
    return is_feature_enabled("feature_chat_enabled")


def refresh_feature_flag_cache() -> None:
    get_feature_flags.cache_clear()
