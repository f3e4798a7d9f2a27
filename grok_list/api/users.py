"""
grok_list/api/users.py

Purpose: User endpoints

- POST /users creates a user and returns it as stored
- Repository failures become a bare 500 (see core/errors.py)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from grok_list.core.logging import get_logger
from grok_list.schemas.user import UserCreate, UserResponse
from grok_list.services.grocery_service import GroceryService, get_grocery_service

logger = get_logger(__name__)
router = APIRouter()


@router.post("/users", response_model=UserResponse)
async def create_user(
    user: UserCreate,
    service: GroceryService = Depends(get_grocery_service),
):
    """
    Creates a user and returns the stored document.
    """
    created = await service.add_user(user.to_model())

    if created is None:
        logger.error("No new user returned")
        return Response(status_code=500)

    return UserResponse.from_model(created)
