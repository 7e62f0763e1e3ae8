"""
FastAPI dependencies shared by the route modules.

Everything comes from ``app.state``, set up by the application factory in
main.py, so tests can build an app around their own store and settings.
"""

import logging

from fastapi import Depends, Request

from sooner.accounts import require_user
from sooner.assistant import AssistantService
from sooner.config import Settings
from sooner.errors import BadRequest, Forbidden, Unauthenticated
from sooner.security.tokens import create_token

from .store import DocumentStore

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_assistant(request: Request) -> AssistantService:
    return request.app.state.assistant


def get_current_user_id(request: Request) -> str:
    """
    Resolve the caller's user id with the configured identity resolver.

    Raises:
        Unauthenticated: no credential presented (401)
        InvalidToken: credential failed verification (401)
    """
    return request.app.state.identity_resolver.resolve(request.headers)


def get_assistant_caller_id(request: Request) -> str:
    """Like get_current_user_id, but a missing identity is a 400."""
    try:
        return get_current_user_id(request)
    except Unauthenticated as e:
        raise BadRequest(e.message) from e


def require_mega_user(
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
) -> str:
    """Allow only users with ``isMegaUser`` set."""
    user = require_user(store.snapshot(), user_id)
    if not user.get("isMegaUser"):
        logger.warning(f"Admin access denied for user {user_id}")
        raise Forbidden("Admin access required")
    return user_id


def issue_token(settings: Settings, user_id: str) -> str:
    return create_token(
        user_id,
        settings.auth.jwt_secret,
        ttl_hours=settings.auth.token_ttl_hours,
        algorithm=settings.auth.jwt_algorithm,
    )
