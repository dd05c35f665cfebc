from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_user_directory
from app.api.error_handlers import error_response
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserProfile

router = APIRouter()


# NOTE: must come before /{user_id}
@router.get("/email/{email}", response_model=UserProfile)
async def get_user_by_email(
    email: str,
    users: UserRepository = Depends(get_user_directory),
    db: AsyncSession = Depends(get_db)
):
    """Look up a user profile by email"""
    user = await users.get_by_email(db, email)
    if user is None:
        return error_response(404, "USER_NOT_FOUND", f"User not found with email: {email}")
    return user


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: int,
    users: UserRepository = Depends(get_user_directory),
    db: AsyncSession = Depends(get_db)
):
    """Look up a user profile by id"""
    return await users.resolve_or_fail(db, user_id)
