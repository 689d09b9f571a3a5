"""
Role-based authorization policy.

A single lookup table answers "may this role perform this action"; the
helpers below turn a deny into the matching error.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.errors import Forbidden, Unauthorized


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    AUTHOR = "author"
    VIEWER = "viewer"


class Action(str, Enum):
    CREATE_CONTENT = "create_content"
    DELETE_CONTENT = "delete_content"
    MANAGE_TAGS = "manage_tags"
    MANAGE_CATEGORIES = "manage_categories"
    MANAGE_EXCHANGE_RATES = "manage_exchange_rates"


_GRANTS: dict[Action, frozenset[Role]] = {
    Action.CREATE_CONTENT: frozenset({Role.ADMIN, Role.EDITOR, Role.AUTHOR}),
    Action.DELETE_CONTENT: frozenset({Role.ADMIN, Role.EDITOR}),
    Action.MANAGE_TAGS: frozenset({Role.ADMIN, Role.EDITOR, Role.AUTHOR}),
    Action.MANAGE_CATEGORIES: frozenset({Role.ADMIN, Role.EDITOR}),
    Action.MANAGE_EXCHANGE_RATES: frozenset({Role.ADMIN}),
}


def parse_role(value: Any) -> Role | None:
    try:
        return Role(str(value or "").strip().lower())
    except ValueError:
        return None


def is_allowed(role: Role | str | None, action: Action) -> bool:
    parsed = role if isinstance(role, Role) else parse_role(role)
    if parsed is None:
        return False
    return parsed in _GRANTS.get(action, frozenset())


def authorize(user: dict | None, action: Action) -> dict:
    """
    Return the user when allowed; raise Unauthorized/Forbidden otherwise.
    """
    if not user:
        raise Unauthorized("Authentication required")
    if not is_allowed(user.get("role"), action):
        raise Forbidden("You are not authorized to perform this action.")
    return user


def authorize_owner_or(user: dict | None, action: Action, *, owner_id: str | None) -> dict:
    """
    Owners may act on their own items; everyone else needs the action grant.
    """
    if not user:
        raise Unauthorized("Authentication required")
    if owner_id is not None and str(user.get("id")) == str(owner_id):
        return user
    return authorize(user, action)
