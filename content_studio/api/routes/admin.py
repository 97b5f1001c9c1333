import logging

from fastapi import APIRouter, Depends, HTTPException, status

from content_studio.dependencies.auth import require_user_types
from content_studio.models.user import User, UserType
from content_studio.schemas.user import UserResponse, UserTypeUpdate
from content_studio.services.user_service import set_user_type, to_user_response
from content_studio.stores import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put("/users/{user_id}/user-type", response_model=UserResponse)
def change_user_type(
    user_id: str,
    payload: UserTypeUpdate,
    admin: User = Depends(require_user_types(UserType.ADMIN)),
    store: Store = Depends(get_store),
):
    """Move a user to another plan. Admins only."""
    user = set_user_type(store, user_id, payload.user_type)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    logger.info(f"Admin {admin.id} set user {user_id} to {payload.user_type.value}")
    return to_user_response(user)
