"""
User Routes - the caller's own profile

- GET    /user/me
- PATCH  /user/me
- DELETE /user/me
"""

from fastapi import APIRouter, Depends, Response, status

from sooner.accounts import delete_user, patch_user, prepare_profile_changes, public_user, require_user

from ..deps import get_current_user_id, get_store
from ..models import UserPatch
from ..store import DocumentStore

router = APIRouter()


@router.get("/me")
def get_me(user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    return public_user(require_user(store.snapshot(), user_id))


@router.patch("/me")
def patch_me(
    request: UserPatch,
    user_id: str = Depends(get_current_user_id),
    store: DocumentStore = Depends(get_store),
):
    """Merge profile changes. Identity, tasks and capability flags are not patchable here."""
    changes = prepare_profile_changes(request.to_fields())
    with store.transaction() as users:
        user = patch_user(users, require_user(users, user_id), changes)
        return public_user(user)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(user_id: str = Depends(get_current_user_id), store: DocumentStore = Depends(get_store)):
    with store.transaction() as users:
        delete_user(users, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
