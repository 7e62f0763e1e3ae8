"""
Admin Routes - mega users only

- POST  /admin/users            - Create a user with chosen capability flags
- PATCH /admin/users/{user_id}  - Change a user's capability flags
- GET   /admin/settings         - Runtime settings (no secrets)
"""

import logging

from fastapi import APIRouter, Depends, status

from sooner.accounts import create_user, public_user, require_user, set_flags
from sooner.config import Settings
from sooner.security.passwords import hash_password

from ..deps import get_settings, get_store, require_mega_user
from ..models import AdminCreateUser, AdminFlagsPatch, AuthorizationFlags
from ..store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/users", status_code=status.HTTP_201_CREATED)
def admin_create_user(
    request: AdminCreateUser,
    admin_id: str = Depends(require_mega_user),
    store: DocumentStore = Depends(get_store),
):
    password_hash = hash_password(request.password)
    with store.transaction() as users:
        user = create_user(
            users,
            request.email,
            password_hash,
            request.name,
            is_mega_user=request.isMegaUser,
            assistant_on=request.assistantOn,
        )
    logger.info(f"Admin {admin_id} created user {user['id']}")
    return public_user(user)


@router.patch("/users/{user_id}", response_model=AuthorizationFlags)
def admin_set_flags(
    user_id: str,
    request: AdminFlagsPatch,
    admin_id: str = Depends(require_mega_user),
    store: DocumentStore = Depends(get_store),
):
    """Grant or revoke capabilities, e.g. turn the assistant on after a request."""
    with store.transaction() as users:
        flags = set_flags(require_user(users, user_id), request.model_dump(exclude_unset=True))
    logger.info(f"Admin {admin_id} set flags for user {user_id}: {flags}")
    return AuthorizationFlags(**flags)


@router.get("/settings")
def admin_settings(
    admin_id: str = Depends(require_mega_user),
    settings: Settings = Depends(get_settings),
):
    return settings.public_view()
