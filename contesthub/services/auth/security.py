from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta
from typing import Optional

from contesthub.core import config
from contesthub.models.auth.token import TokenData
from contesthub.models.auth.user import Role

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS
)


class SecurityService:
    """Service for security operations like password hashing and JWT tokens"""
    
    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """Verify a plain password against a hashed password"""
        if not hashed_password:
            return False
        return pwd_context.verify(str(plain_password)[:72], hashed_password)
    
    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password"""
        # Bcrypt has a 72-byte limit
        return pwd_context.hash(str(password)[:72])
    
    @staticmethod
    def create_access_token(email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create JWT access token carrying the caller's email and role"""
        if expires_delta is None:
            expires_delta = timedelta(days=config.ACCESS_TOKEN_EXPIRE_DAYS)
        
        to_encode = {
            "sub": email,
            "email": email,
            "role": Role(role).value,
            "type": "access",
            "exp": datetime.utcnow() + expires_delta
        }
        return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)
    
    @staticmethod
    def verify_token(token: str) -> Optional[TokenData]:
        """Verify and decode JWT token"""
        try:
            payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        except JWTError:
            return None
        
        if payload.get("type") != "access":
            return None
        
        email = payload.get("email") or payload.get("sub")
        role = payload.get("role")
        if not email or role not in {r.value for r in Role}:
            return None
        
        return TokenData(email=email.lower(), role=role)


security_service = SecurityService()
