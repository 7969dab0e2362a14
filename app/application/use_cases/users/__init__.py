"""Use cases for managing users and their sessions."""

from .authenticate_user import authenticate_user
from .create_user import create_user
from .directory import delete_user, get_user, list_users, record_login
from .sessions import (
    IssuedTokens,
    issue_tokens,
    refresh_access_token,
    revoke_all_sessions,
    revoke_session,
)

__all__ = [
    "IssuedTokens",
    "authenticate_user",
    "create_user",
    "delete_user",
    "get_user",
    "issue_tokens",
    "list_users",
    "record_login",
    "refresh_access_token",
    "revoke_all_sessions",
    "revoke_session",
]
