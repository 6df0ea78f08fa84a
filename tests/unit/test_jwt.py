"""Tests for bearer token issue/verify and context extraction."""

from datetime import timedelta

import pytest

from cms_admin.infrastructure.security.jwt import (
    context_from_token,
    create_access_token,
    verify_token,
)


def test_token_round_trip_carries_sub_and_permissions() -> None:
    token = create_access_token("user-1", ["manage_roles", "manage_roles", "edit_pages"])
    payload = verify_token(token)
    assert payload["sub"] == "user-1"
    assert payload["permissions"] == ["edit_pages", "manage_roles"]
    assert "exp" in payload


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-1", expires_delta=timedelta(seconds=-30))
    with pytest.raises(ValueError):
        verify_token(token)


def test_garbage_token_is_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token("not-a-token")


def test_context_from_token() -> None:
    token = create_access_token("user-7", ["full_admin_access"])
    ctx = context_from_token(token, ip_address="127.0.0.1")
    assert ctx.is_authenticated is True
    assert ctx.user_id == "user-7"
    assert ctx.ip_address == "127.0.0.1"
    assert ctx.has_permission("manage_users") is True
