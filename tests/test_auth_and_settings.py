from user_api.auth import extract_bearer_token, is_public_path, is_valid_token
from user_api.settings import DEFAULT_PUBLIC_PATHS, Settings


def test_extract_bearer_token():
    assert extract_bearer_token(None) is None
    assert extract_bearer_token("Basic abc") is None
    assert extract_bearer_token("bearer abc") is None
    assert extract_bearer_token("Bearer ") is None
    assert extract_bearer_token("Bearer  abc ") == "abc"
    assert extract_bearer_token("Bearer bearer abc") == "abc"


def test_is_valid_token():
    assert is_valid_token("abc", ["x", "abc"])
    assert not is_valid_token("abd", ["abc"])
    assert not is_valid_token("abc", [])


def test_is_public_path_uses_prefixes():
    assert is_public_path("/docs/oauth2-redirect", ["/docs"])
    assert not is_public_path("/users", ["/docs"])
    assert not is_public_path("/docs", [])


def test_settings_defaults(monkeypatch):
    for name in ("API_TOKENS", "PUBLIC_PATHS", "ENFORCE_UNIQUE_EMAIL", "CORS_ALLOW_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.enforce_unique_email is True
    assert s.public_paths == DEFAULT_PUBLIC_PATHS
    assert len(s.api_tokens) == 1


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("API_TOKENS", '["one", " two ", ""]')
    monkeypatch.setenv("PUBLIC_PATHS", '["/docs"]')
    monkeypatch.setenv("ENFORCE_UNIQUE_EMAIL", "false")
    s = Settings(_env_file=None)
    assert s.api_tokens == ["one", "two"]
    assert s.public_paths == ["/docs"]
    assert s.enforce_unique_email is False
