"""
Tests for role-based authorization.
"""

import pytest

from auth.policy import Action, Role, authorize, authorize_owner_or, is_allowed, parse_role
from core.errors import Forbidden, Unauthorized


@pytest.mark.parametrize(
    "role,action,allowed",
    [
        (Role.AUTHOR, Action.CREATE_CONTENT, True),
        (Role.VIEWER, Action.CREATE_CONTENT, False),
        (Role.AUTHOR, Action.DELETE_CONTENT, False),
        (Role.EDITOR, Action.DELETE_CONTENT, True),
        (Role.EDITOR, Action.MANAGE_EXCHANGE_RATES, False),
        (Role.ADMIN, Action.MANAGE_EXCHANGE_RATES, True),
        ("unknown", Action.CREATE_CONTENT, False),
        (None, Action.MANAGE_TAGS, False),
    ],
)
def test_is_allowed(role, action, allowed):
    assert is_allowed(role, action) is allowed


def test_parse_role_normalizes():
    assert parse_role(" Editor ") is Role.EDITOR
    assert parse_role("root") is None


def test_authorize_anonymous():
    with pytest.raises(Unauthorized):
        authorize(None, Action.CREATE_CONTENT)


def test_authorize_returns_user():
    user = {"id": "u1", "role": "author"}
    assert authorize(user, Action.CREATE_CONTENT) is user


def test_authorize_forbidden():
    with pytest.raises(Forbidden):
        authorize({"id": "u1", "role": "viewer"}, Action.MANAGE_TAGS)


def test_owner_bypasses_grant():
    user = {"id": "u1", "role": "author"}
    assert authorize_owner_or(user, Action.DELETE_CONTENT, owner_id="u1") is user

    with pytest.raises(Forbidden):
        authorize_owner_or(user, Action.DELETE_CONTENT, owner_id="u2")
