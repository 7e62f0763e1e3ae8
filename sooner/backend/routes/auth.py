"""
Authentication Routes

- POST /auth/signup     - Create an account, returns a token
- POST /auth/signin     - Check credentials, returns a token
- GET  /auth/validate   - Is the presented identity a live account?
- GET  /auth/authorize  - Capability flags of the caller
- POST /auth/assistant  - Ask for access to the assistant
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from sooner.accounts import (
    authenticate,
    authorization_flags,
    create_user,
    request_assistant_access,
    require_user,
)
from sooner.config import Settings
from sooner.security.passwords import hash_password

from ..deps import get_current_user_id, get_settings, get_store, issue_token
from ..models import AuthorizationFlags, Credentials, SignupRequest, TokenResponse, ValidateResponse
from ..store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    request: SignupRequest,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Create an account. Fails with 400 when the email is taken."""
    password_hash = hash_password(request.password)
    with store.transaction() as users:
        user = create_user(users, request.email, password_hash, request.name)

    return TokenResponse(token=issue_token(settings, user["id"]), userId=user["id"])


@router.post("/signin", response_model=TokenResponse)
def signin(
    request: Credentials,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a token."""
    user = authenticate(store.snapshot(), request.email, request.password)
    return TokenResponse(token=issue_token(settings, user["id"]), userId=user["id"])


@router.get("/validate", response_model=ValidateResponse)
def validate(user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    require_user(store.snapshot(), user_id)
    return ValidateResponse(valid=True)


@router.get("/authorize", response_model=AuthorizationFlags)
def authorize(user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    user = require_user(store.snapshot(), user_id)
    return AuthorizationFlags(**authorization_flags(user))


@router.post("/assistant", response_class=PlainTextResponse)
def request_assistant(user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    """Record that the caller wants the assistant turned on."""
    with store.transaction() as users:
        request_assistant_access(require_user(users, user_id))
    return "Access requested"
