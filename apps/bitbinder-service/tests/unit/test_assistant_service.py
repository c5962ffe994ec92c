import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import requests

from bitbinder.services import assistant_service as svc
from bitbinder.utils.feature_flags import refresh_feature_flag_cache


def _response(content=None, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError("boom")
    else:
        resp.raise_for_status.return_value = None
    resp.json.return_value = {"choices": [{"message": {"content": content}}]}
    return resp


@pytest.fixture
def service():
    return svc.AssistantService(svc.AssistantConfig(api_base="http://llm.test/v1"))


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_BASE", "http://example.test/v1/")
    monkeypatch.setenv("OPENAI_MODEL", "tiny")
    monkeypatch.setenv("OPENAI_TIMEOUT_SECONDS", "nope")
    monkeypatch.setenv("OPENAI_API_KEY", " sk-server ")
    cfg = svc.AssistantConfig.from_env()
    assert cfg.api_base == "http://example.test/v1"
    assert cfg.model == "tiny"
    assert cfg.timeout_seconds == 30.0
    assert cfg.server_api_key == "sk-server"


def test_resolve_api_key_prefers_user_then_server(monkeypatch):
    service = svc.AssistantService(svc.AssistantConfig(server_api_key="sk-server"))
    assert service.resolve_api_key("sk-user") == "sk-user"
    assert service.resolve_api_key("  ") == "sk-server"
    monkeypatch.setenv("LLM_FEATURES_ENABLED", "false")
    refresh_feature_flag_cache()
    assert service.resolve_api_key("sk-user") is None
    assert service.engine_for("sk-user") == svc.ENGINE_BUILT_IN


def test_call_openai_posts_chat_completion(monkeypatch, service):
    post = MagicMock(return_value=_response("hello"))
    monkeypatch.setattr(svc.requests, "post", post)
    out = service.call_openai([{"role": "user", "content": "hi"}], "sk-1", temperature=0.9, max_tokens=300)
    assert out == "hello"
    args, kwargs = post.call_args
    assert args[0] == "http://llm.test/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-1"
    assert kwargs["json"]["model"] == "gpt-4o-mini"
    assert kwargs["json"]["temperature"] == 0.9
    assert kwargs["json"]["max_tokens"] == 300


def test_call_openai_failure_raises(monkeypatch, service):
    monkeypatch.setattr(svc.requests, "post", MagicMock(return_value=_response(status_code=500)))
    with pytest.raises(svc.AssistantError, match="OpenAI request failed"):
        service.call_openai([], "sk-1")


def test_generate_requires_topic(service):
    with pytest.raises(ValueError, match="Add a topic or premise first."):
        service.generate_jokes("   ", "observational", None)


def test_generate_without_key_uses_templates(service):
    engine, jokes = service.generate_jokes("airports", "", None)
    assert engine == svc.ENGINE_BUILT_IN
    assert [j["title"] for j in jokes] == [
        "(observational) airports #1",
        "(observational) airports #2",
        "(observational) airports #3",
    ]
    assert jokes[2]["text"] == "I tried to fix my airports problem... Now it has my number."


def test_generate_with_key_parses_fenced_json(monkeypatch, service):
    content = '```json\n[{"title": "A", "text": "one"}, {"setup": "Why?", "punchline": "Because."}]\n```'
    monkeypatch.setattr(svc.requests, "post", MagicMock(return_value=_response(content)))
    engine, jokes = service.generate_jokes("cats", "dark", "sk-1")
    assert engine == svc.ENGINE_OPENAI
    assert jokes == [
        {"title": "A", "text": "one"},
        {"title": "Joke 2", "text": "Why?\n\nBecause."},
    ]


def test_generate_falls_back_on_bad_reply(monkeypatch, service):
    monkeypatch.setattr(svc.requests, "post", MagicMock(return_value=_response("not json")))
    engine, jokes = service.generate_jokes("cats", "dark", "sk-1")
    assert engine == svc.ENGINE_BUILT_IN
    assert jokes[0]["title"] == "(dark) cats #1"


def test_organize_requires_jokes(service):
    with pytest.raises(ValueError, match="Add a few jokes first."):
        service.organize([], None)


def test_organize_built_in_rules(service):
    jokes = [
        SimpleNamespace(id=uuid.uuid4(), title="Flight", text="delayed again"),
        SimpleNamespace(id=uuid.uuid4(), title="Pigeons", text=None),
    ]
    engine, assignments = service.organize(jokes, None)
    assert engine == svc.ENGINE_BUILT_IN
    assert [a[1] for a in assignments] == ["Travel", "Misc"]


def test_organize_with_llm_ignores_unknown_ids(monkeypatch, service):
    j = SimpleNamespace(id=uuid.uuid4(), title="x", text="y")
    content = f'[{{"id": "{j.id}", "folder": "Bits"}}, {{"id": "nope", "folder": "Z"}}]'
    monkeypatch.setattr(svc.requests, "post", MagicMock(return_value=_response(content)))
    engine, assignments = service.organize([j], "sk-1")
    assert engine == svc.ENGINE_OPENAI
    assert assignments == [(j.id, "Bits")]


def test_chat_reply_fallback_and_llm(monkeypatch, service):
    engine, reply = service.chat_reply([], "hi", None)
    assert engine == svc.ENGINE_BUILT_IN and reply in svc.CANNED_CHAT_REPLIES

    post = MagicMock(return_value=_response("Knock knock"))
    monkeypatch.setattr(svc.requests, "post", post)
    engine, reply = service.chat_reply([{"role": "user", "content": "earlier"}], "hi", "sk-1")
    assert (engine, reply) == (svc.ENGINE_OPENAI, "Knock knock")
    sent = post.call_args.kwargs["json"]["messages"]
    assert sent[0] == {"role": "system", "content": svc.CHAT_SYSTEM_PROMPT}
    assert sent[-1] == {"role": "user", "content": "hi"}


def test_needs_history_trim():
    assert not svc.needs_history_trim(19)
    assert svc.needs_history_trim(20)


def test_mask_api_key():
    assert svc.mask_api_key(None) == ""
    assert svc.mask_api_key("short") == "*****"
    assert svc.mask_api_key("sk-abcdefghijkl") == "sk-...ijkl"
