from __future__ import annotations

from datetime import timedelta

import pytest

from todo_app.core.security import (
    ExpiredSignatureError,
    create_session_token,
    decode_token,
    get_password_hash,
    verify_password,
)

from .conftest import build_settings


def test_password_hash_round_trip() -> None:
    hashed = get_password_hash("pw1")

    assert hashed != "pw1"
    assert hashed.startswith("$2")
    assert verify_password("pw1", hashed)
    assert not verify_password("pw2", hashed)


def test_session_token_claims() -> None:
    settings = build_settings(session_ttl_minutes=30)

    generated = create_session_token(subject="0123456789abcdef01234567", settings=settings)
    claims = decode_token(
        token=generated.token,
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    assert claims["sub"] == "0123456789abcdef01234567"
    assert claims["jti"] == generated.jti
    assert claims["exp"] - claims["iat"] == 30 * 60


def test_expired_session_token_is_rejected() -> None:
    settings = build_settings()
    generated = create_session_token(
        subject="0123456789abcdef01234567",
        settings=settings,
        expires_delta=timedelta(seconds=-1),
    )

    with pytest.raises(ExpiredSignatureError):
        decode_token(token=generated.token, secret=settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
