from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, Dict
from pymongo.errors import DuplicateKeyError

from contesthub.models.auth.user import UserInDB, Role
from contesthub.models.auth.token import RegisterRequest, LoginRequest, GoogleLoginRequest
from contesthub.services.auth.security import security_service
from contesthub.services.auth.google_auth import google_auth_service
from contesthub.utils.errors import Conflict, InvalidInput, InvalidCredential, NotFound


def normalize_email(email: Optional[str]) -> str:
    """Emails are stored and compared lower-cased"""
    return (email or "").strip().lower()


class AuthService:
    """Service for registration and login"""
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users_collection = db.users
    
    async def get_user_by_email(self, email: str) -> Optional[Dict]:
        """Get user by email (case-insensitive)"""
        return await self.users_collection.find_one({"email": normalize_email(email)})
    
    @staticmethod
    def issue_token(user: Dict) -> Dict:
        """Build the login payload for a user document"""
        token = security_service.create_access_token(user["email"], user.get("role", Role.USER.value))
        return {
            "token": token,
            "token_type": "bearer",
            "role": user.get("role", Role.USER.value),
            "email": user["email"],
            "name": user.get("name"),
            "photoURL": user.get("photoURL"),
            "bio": user.get("bio") or ""
        }
    
    async def create_user(
        self,
        email: str,
        name: Optional[str] = None,
        password: Optional[str] = None,
        role: Role = Role.USER,
        photo_url: Optional[str] = None
    ) -> Dict:
        """Insert a new user record"""
        user_data = UserInDB(
            name=name,
            email=normalize_email(email),
            password=security_service.get_password_hash(password) if password else None,
            role=role,
            photo_url=photo_url
        )
        
        document = user_data.model_dump(by_alias=True)
        try:
            result = await self.users_collection.insert_one(document)
        except DuplicateKeyError:
            raise Conflict("User already exists")
        
        document["_id"] = result.inserted_id
        return document
    
    async def register(self, register_data: RegisterRequest) -> Dict:
        """Register a user with email and password"""
        email = normalize_email(register_data.email)
        if not email or not register_data.password:
            raise InvalidInput("Email & password required")
        
        role = Role.USER
        if register_data.role:
            try:
                role = Role(register_data.role)
            except ValueError:
                raise InvalidInput(f"Invalid role: {register_data.role}")
        
        if await self.get_user_by_email(email):
            raise Conflict("User already exists")
        
        return await self.create_user(
            email=email,
            name=register_data.name,
            password=register_data.password,
            role=role
        )
    
    async def login(self, login_data: LoginRequest) -> Dict:
        """Login user with email and password"""
        email = normalize_email(login_data.email)
        if not email or not login_data.password:
            raise InvalidInput("Email & password required")
        
        user = await self.get_user_by_email(email)
        if not user:
            raise NotFound("User not found")
        
        # Google-only accounts have no local password
        if not user.get("password"):
            raise InvalidInput("Invalid credentials")
        
        if not security_service.verify_password(login_data.password, user["password"]):
            raise InvalidInput("Invalid credentials")
        
        return user
    
    async def google_login(self, google_data: GoogleLoginRequest) -> Dict:
        """Login or create user from a Google identity"""
        email = google_data.email
        name = google_data.name
        photo_url = google_data.photo_url
        
        if google_data.id_token:
            google_user_info = await google_auth_service.verify_google_token(google_data.id_token)
            if not google_user_info:
                raise InvalidCredential("Invalid Google token")
            email = google_user_info["email"]
            name = google_user_info.get("name") or name
            photo_url = google_user_info.get("picture") or photo_url
        
        email = normalize_email(email)
        if not email or not name:
            raise InvalidInput("Email and name required")
        
        user = await self.get_user_by_email(email)
        
        if not user:
            try:
                return await self.create_user(email=email, name=name, photo_url=photo_url)
            except Conflict:
                # Created by a concurrent first login
                user = await self.get_user_by_email(email)
        
        # Backfill missing photo
        if photo_url and not user.get("photoURL"):
            await self.users_collection.update_one(
                {"_id": user["_id"]},
                {"$set": {"photoURL": photo_url}}
            )
            user["photoURL"] = photo_url
        
        return user
