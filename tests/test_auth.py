import logging

import pytest

from task_widget_api import auth
from task_widget_api.auth import TokenVerifier, extract_bearer_token

from tests._helpers import TEST_JWT_SECRET, make_token


def test_verify_token_returns_claims_for_valid_token():
    v = TokenVerifier(TEST_JWT_SECRET)
    claims = v.verify_token(make_token(sub="alice"))
    assert claims is not None
    assert claims["sub"] == "alice"


def test_verify_token_rejects_wrong_secret(caplog):
    caplog.set_level(logging.DEBUG)
    v = TokenVerifier(TEST_JWT_SECRET)
    assert v.verify_token(make_token(secret="another-secret")) is None
    assert any("JWT verification failed" in r.getMessage() for r in caplog.records)


def test_verify_token_rejects_expired_token():
    v = TokenVerifier(TEST_JWT_SECRET)
    assert v.verify_token(make_token(expires_in=-60)) is None


def test_verify_token_requires_expiry():
    v = TokenVerifier(TEST_JWT_SECRET)
    assert v.verify_token(make_token(include_exp=False)) is None


def test_verify_token_rejects_garbage():
    v = TokenVerifier(TEST_JWT_SECRET)
    assert v.verify_token("not-a-jwt") is None
    assert v.verify_token("") is None


def test_verify_token_without_secret_rejects_everything():
    v = TokenVerifier(None)
    assert v.verify_token(make_token()) is None


def test_verify_token_rejects_other_algorithm():
    v = TokenVerifier(TEST_JWT_SECRET, algorithm="HS256")
    assert v.verify_token(make_token(algorithm="HS512")) is None


def test_issuer_enforced_when_configured():
    v = TokenVerifier(TEST_JWT_SECRET, issuer="https://id.example.com")
    assert v.verify_token(make_token(iss="https://id.example.com")) is not None
    assert v.verify_token(make_token(iss="https://evil.example.com")) is None
    assert v.verify_token(make_token()) is None


def test_audience_enforced_when_configured():
    v = TokenVerifier(TEST_JWT_SECRET, audience="task-api")
    assert v.verify_token(make_token(aud="task-api")) is not None
    assert v.verify_token(make_token(aud="other-api")) is None


def test_audience_ignored_when_not_configured():
    v = TokenVerifier(TEST_JWT_SECRET)
    assert v.verify_token(make_token(aud="whatever")) is not None


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def.ghi", "abc.def.ghi"),
    ("bearer abc", "abc"),
    ("  Bearer   abc  ", "abc"),
    ("Bearer", None),
    ("Bearer ", None),
    ("Basic dXNlcjpwYXNz", None),
    ("", None),
    (None, None),
])
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_get_token_verifier_is_singleton_built_from_settings(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("JWT_ISSUER", "https://id.example.com")
    auth.clear_verifier()
    try:
        v1 = auth.get_token_verifier()
        assert v1.secret == "from-env"
        assert v1.issuer == "https://id.example.com"
        monkeypatch.setenv("JWT_SECRET", "changed")
        assert auth.get_token_verifier() is v1
    finally:
        auth.clear_verifier()


def test_clear_verifier_logs(caplog):
    caplog.set_level(logging.DEBUG)
    auth.clear_verifier()
    assert any("Cleared token verifier singleton" in r.getMessage() for r in caplog.records)
