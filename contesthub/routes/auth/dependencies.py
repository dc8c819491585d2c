from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from contesthub.models.auth.token import TokenData
from contesthub.models.auth.user import Role
from contesthub.services.auth.security import SecurityService
from contesthub.utils.errors import Forbidden, InvalidCredential, Unauthenticated

# OAuth2 scheme (None when the header is missing or not a Bearer token)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

# Security service
security_service = SecurityService()


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)]
) -> TokenData:
    """Caller identity from the bearer token"""
    if not token:
        raise Unauthenticated("Unauthorized")
    
    token_data = security_service.verify_token(token)
    if token_data is None:
        raise InvalidCredential("Invalid token")
    
    return token_data


async def require_admin(
    current_user: Annotated[TokenData, Depends(get_current_user)]
) -> TokenData:
    if current_user.role != Role.ADMIN:
        raise Forbidden("Admin only")
    return current_user


async def require_creator(
    current_user: Annotated[TokenData, Depends(get_current_user)]
) -> TokenData:
    if current_user.role != Role.CREATOR:
        raise Forbidden("Creator only")
    return current_user
