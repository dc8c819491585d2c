from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from contesthub.database import get_database
from contesthub.models.auth.token import TokenData, RegisterRequest, LoginRequest, GoogleLoginRequest
from contesthub.models.auth.user import ProfileUpdate
from contesthub.services.auth.auth_service import AuthService
from contesthub.services.auth.profile import ProfileService
from contesthub.routes.auth.dependencies import get_current_user
from contesthub.utils.response import success_response

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register")
async def register(
    register_data: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Register with email and password.
    Returns an access token on success.
    """
    auth_service = AuthService(db)
    user = await auth_service.register(register_data)
    
    return success_response(
        message="User registered successfully",
        data=AuthService.issue_token(user),
        status_code=201
    )


@router.post("/login")
async def login(
    login_data: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Login with email and password"""
    auth_service = AuthService(db)
    user = await auth_service.login(login_data)
    
    return success_response(
        message="Login successful",
        data=AuthService.issue_token(user)
    )


@router.post("/google-login")
async def google_login(
    google_data: GoogleLoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Authenticate with Google.
    Creates the user on first login; the token carries the stored role.
    """
    auth_service = AuthService(db)
    user = await auth_service.google_login(google_data)
    
    return success_response(
        message="Google authentication successful",
        data=AuthService.issue_token(user)
    )


@router.get("/me")
async def get_me(
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Get current user's profile"""
    profile = await ProfileService(db).get_profile(current_user.email)
    
    return success_response(
        message="Profile retrieved successfully",
        data=profile
    )


@router.put("/me")
async def update_me(
    profile_data: ProfileUpdate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Update name, photo or bio; omitted fields are kept"""
    profile = await ProfileService(db).update_profile(current_user.email, profile_data)
    
    return success_response(
        message="Profile updated successfully",
        data=profile
    )
