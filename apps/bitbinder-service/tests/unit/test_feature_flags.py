from bitbinder.utils import feature_flags as ff


def test_defaults_enabled(monkeypatch):
    monkeypatch.delenv("LLM_FEATURES_ENABLED", raising=False)
    ff.refresh_feature_flag_cache()
    assert ff.llm_features_enabled() is True
    assert ff.chat_feature_enabled() is True


def test_env_disables_and_cache_refresh(monkeypatch):
    monkeypatch.setenv("LLM_FEATURES_ENABLED", "false")
    ff.refresh_feature_flag_cache()
    assert ff.llm_features_enabled() is False
    monkeypatch.setenv("LLM_FEATURES_ENABLED", "1")
    # cached until refreshed
    assert ff.llm_features_enabled() is False
    ff.refresh_feature_flag_cache()
    assert ff.llm_features_enabled() is True


def test_normalize_bool():
    assert ff.normalize_bool(None, default=False) is False
    assert ff.normalize_bool("off") is False
    assert ff.normalize_bool("YES") is True
    assert ff.normalize_bool("maybe", default=True) is True


def test_flag_reads_its_own_env_var():
    flag = ff.FEATURE_FLAGS["feature_chat_enabled"]
    assert flag.env_var == "FEATURE_CHAT_ENABLED"
    assert flag.read({"FEATURE_CHAT_ENABLED": "no"}) is False
    assert flag.read({"LLM_FEATURES_ENABLED": "no"}) is True
