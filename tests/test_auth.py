"""
Tests for the identity gate and the role-based authorization policy
"""
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from firebase_admin import auth as firebase_auth

from app.services.auth import Identity, get_current_identity
from app.services.authorization import AuthorizationPolicy, Capability


def _credentials(token="valid-token"):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_missing_token_is_unauthenticated():
    calls = []

    def verifier(token):
        calls.append(token)
        return {}

    with pytest.raises(HTTPException) as exc_info:
        get_current_identity(credentials=None, verify_token=verifier)

    assert exc_info.value.status_code == 401
    # No verification is attempted without a token
    assert calls == []


def test_invalid_token_is_forbidden():
    def verifier(token):
        raise ValueError("Token expired")

    with pytest.raises(HTTPException) as exc_info:
        get_current_identity(credentials=_credentials(), verify_token=verifier)

    assert exc_info.value.status_code == 403


def test_revoked_firebase_token_is_forbidden():
    def verifier(token):
        raise firebase_auth.RevokedIdTokenError("revoked")

    with pytest.raises(HTTPException) as exc_info:
        get_current_identity(credentials=_credentials(), verify_token=verifier)

    assert exc_info.value.status_code == 403


def test_token_without_email_is_forbidden():
    with pytest.raises(HTTPException) as exc_info:
        get_current_identity(
            credentials=_credentials(), verify_token=lambda token: {"uid": "abc"}
        )

    assert exc_info.value.status_code == 403


def test_valid_token_attaches_identity():
    decoded = {"uid": "abc123", "email": "player@example.com", "name": "Maria"}

    identity = get_current_identity(
        credentials=_credentials("good"), verify_token=lambda token: decoded
    )

    assert identity == Identity(uid="abc123", email="player@example.com", name="Maria")


def test_unknown_caller_is_not_admin(db):
    """A verified email with no user record must never be treated as admin"""
    policy = AuthorizationPolicy(db)
    stranger = Identity(uid="x", email="nobody@example.com")

    assert policy.is_admin(stranger) is False
    with pytest.raises(HTTPException) as exc_info:
        policy.require_admin(stranger)
    assert exc_info.value.status_code == 403


def test_classify_admin_self_other(db, admin_identity, player_identity):
    policy = AuthorizationPolicy(db)

    assert policy.classify(admin_identity, "player@example.com") == Capability.ADMIN
    assert policy.classify(player_identity, "player@example.com") == Capability.SELF
    assert policy.classify(player_identity, "other@example.com") == Capability.OTHER


def test_require_self_or_admin_rejects_other(db, player_identity):
    with pytest.raises(HTTPException) as exc_info:
        AuthorizationPolicy(db).require_self_or_admin(player_identity, "other@example.com")

    assert exc_info.value.status_code == 403


def test_member_role_is_not_admin(db, player_user, player_identity):
    player_user.role = "member"
    db.commit()

    assert AuthorizationPolicy(db).is_admin(player_identity) is False
