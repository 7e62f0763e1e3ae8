"""
Identity resolution - turn request headers into a user id

Two interchangeable strategies behind one interface, selected by
``auth.mode`` in args/sooner.yaml:

- token  (BearerTokenResolver): ``Authorization: Bearer <jwt>``, signature
  and expiry verified.
- header (TrustedHeaderResolver): the ``user-id`` header is taken at face
  value. No security at all; only for local use with trusted clients.

Both raise Unauthenticated when no identity is presented, so callers can
tell "absent" apart from "invalid" (InvalidToken, token mode only).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping

from sooner.config import AuthConfig
from sooner.errors import Unauthenticated

from .tokens import DEFAULT_ALGORITHM, decode_token

logger = logging.getLogger(__name__)

USER_ID_HEADER = "user-id"


class IdentityResolver(ABC):
    """Resolves the caller's user id from request headers."""

    mode: str = ""

    @abstractmethod
    def resolve(self, headers: Mapping[str, str]) -> str:
        """
        Return the caller's user id.

        Raises:
            Unauthenticated: no identity presented
            InvalidToken: identity presented but not verifiable
        """


class BearerTokenResolver(IdentityResolver):
    mode = "token"

    def __init__(self, secret: str, algorithm: str = DEFAULT_ALGORITHM):
        self._secret = secret
        self._algorithm = algorithm

    def resolve(self, headers: Mapping[str, str]) -> str:
        auth_header = headers.get("authorization", "")
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise Unauthenticated("Authentication required")
        return decode_token(token.strip(), self._secret, self._algorithm)


class TrustedHeaderResolver(IdentityResolver):
    mode = "header"

    def resolve(self, headers: Mapping[str, str]) -> str:
        user_id = headers.get(USER_ID_HEADER, "").strip()
        if not user_id:
            raise Unauthenticated("User ID header is missing")
        return user_id


def build_resolver(auth: AuthConfig) -> IdentityResolver:
    """Create the resolver configured by ``auth.mode``."""
    if auth.mode == "header":
        logger.warning("Identity taken from the user-id header without verification (auth.mode=header)")
        return TrustedHeaderResolver()
    return BearerTokenResolver(auth.jwt_secret, auth.jwt_algorithm)
