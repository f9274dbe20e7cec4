"""Hosted auth: resolves a bearer token to the signed-in user."""

from __future__ import annotations

import logging

from supabase import Client

from inspectroute.core.exceptions import AuthenticationError
from inspectroute.models.workflow import AuthenticatedUser

logger = logging.getLogger(__name__)


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an Authorization header."""
    if not authorization:
        raise AuthenticationError("No authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Invalid or expired token")
    return token.strip()


class SupabaseAuthVerifier:
    """IAuthVerifier backed by the hosted auth service."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            response = self._client.auth.get_user(token)
        except Exception as exc:
            logger.info("Token rejected by auth service: %s", exc)
            raise AuthenticationError("Invalid or expired token") from exc

        user = getattr(response, "user", None)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return AuthenticatedUser(id=str(user.id), email=user.email)


class StaticAuthVerifier:
    """Token -> user table for tests and local development."""

    def __init__(self, users: dict[str, AuthenticatedUser] | None = None) -> None:
        self._users = dict(users or {})

    def add(self, token: str, user: AuthenticatedUser) -> None:
        self._users[token] = user

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            return self._users[token]
        except KeyError:
            raise AuthenticationError("Invalid or expired token") from None
