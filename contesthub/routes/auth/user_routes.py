from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from contesthub.database import get_database
from contesthub.models.auth.token import TokenData
from contesthub.models.auth.user import RoleUpdate
from contesthub.services.auth.profile import ProfileService
from contesthub.routes.auth.dependencies import require_admin
from contesthub.utils.documents import convert_user_to_json
from contesthub.utils.response import success_response

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(
    current_user: TokenData = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """List all users (admin only)"""
    users = await ProfileService(db).list_users()
    
    return success_response(
        message="Users retrieved successfully",
        data={"users": [convert_user_to_json(user) for user in users]}
    )


@router.put("/{user_id}/role")
async def update_user_role(
    user_id: str,
    role_data: RoleUpdate,
    current_user: TokenData = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Change a user's role (admin only).
    Admins may change their own role as well.
    """
    user = await ProfileService(db).set_role(user_id, role_data.role)
    
    return success_response(
        message="Role updated successfully",
        data={"user": convert_user_to_json(user)}
    )
