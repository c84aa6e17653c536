import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from scheduler_bridge.core.auth.codec import decode_session, encode_session
from scheduler_bridge.core.auth.schemas import Credential, SessionArtifact
from scheduler_bridge.core.errors import SessionDecodeError


def test_round_trip_keeps_every_field(artifact):
    decoded = decode_session(encode_session(artifact))
    assert decoded == artifact
    assert decoded.credential.refresh_token == "rt-1"


def test_round_trip_without_optional_tokens():
    original = SessionArtifact(
        identity="bob@example.com",
        credential=Credential(access_token="only-access"),
        calendar_handle="team-calendar@example.com",
    )
    assert decode_session(encode_session(original)) == original


def test_every_single_character_mutation_is_rejected(session_token):
    for i, ch in enumerate(session_token):
        replacement = "A" if ch != "A" else "B"
        mutated = session_token[:i] + replacement + session_token[i + 1:]
        with pytest.raises(SessionDecodeError):
            decode_session(mutated)


@pytest.mark.parametrize(
    "foreign",
    [
        "",
        "not-a-token",
        "a.b.c",
        json.dumps({"email": "ada@example.com", "tokens": {"access_token": "x"}}),
        "éé.é.é",
    ],
)
def test_foreign_input_is_rejected(foreign):
    with pytest.raises(SessionDecodeError):
        decode_session(foreign)


def test_non_string_input_is_rejected():
    with pytest.raises(SessionDecodeError):
        decode_session(None)  # type: ignore[arg-type]


def test_truncated_and_extended_tokens_are_rejected(session_token):
    with pytest.raises(SessionDecodeError):
        decode_session(session_token[:-1])
    with pytest.raises(SessionDecodeError):
        decode_session(session_token + "A")


def test_expired_token_is_rejected(artifact):
    token = encode_session(artifact, expires_delta=timedelta(seconds=-5))
    with pytest.raises(SessionDecodeError):
        decode_session(token)


def test_token_signed_with_other_key_is_rejected(artifact):
    claims = {
        "sub": artifact.identity,
        "cal": artifact.calendar_handle,
        "cred": {"access_token": "forged"},
        "exp": datetime.now(timezone.utc) + timedelta(days=1),
    }
    forged = jwt.encode(claims, "some-other-secret", algorithm="HS256")
    with pytest.raises(SessionDecodeError):
        decode_session(forged)


def test_token_missing_claims_is_rejected():
    from scheduler_bridge.config import settings

    partial = jwt.encode(
        {"sub": "ada@example.com", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        settings.SESSION_SECRET_KEY,
        algorithm=settings.SESSION_ALGORITHM,
    )
    with pytest.raises(SessionDecodeError):
        decode_session(partial)


def test_token_with_malformed_credential_is_rejected():
    from scheduler_bridge.config import settings

    bad = jwt.encode(
        {
            "sub": "ada@example.com",
            "cal": "ada@example.com",
            "cred": "not-an-object",
            "exp": datetime.now(timezone.utc) + timedelta(days=1),
        },
        settings.SESSION_SECRET_KEY,
        algorithm=settings.SESSION_ALGORITHM,
    )
    with pytest.raises(SessionDecodeError):
        decode_session(bad)
