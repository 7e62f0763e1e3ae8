"""
Security - credentials and identity for Sooner

Components:
- passwords.py: bcrypt password hashing
- tokens.py: Signed, time-limited identity tokens (JWT, HS256)
- identity.py: Resolve a request to a user id (bearer token or trusted header)
"""

from .identity import (
    BearerTokenResolver,
    IdentityResolver,
    TrustedHeaderResolver,
    build_resolver,
)
from .passwords import hash_password, verify_password
from .tokens import create_token, decode_token

__all__ = [
    "BearerTokenResolver",
    "IdentityResolver",
    "TrustedHeaderResolver",
    "build_resolver",
    "create_token",
    "decode_token",
    "hash_password",
    "verify_password",
]
