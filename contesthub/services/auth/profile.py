from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Dict
from pymongo import ReturnDocument

from contesthub.models.auth.user import ProfileUpdate, Role
from contesthub.utils.documents import parse_object_id
from contesthub.utils.errors import InvalidInput, NotFound


class ProfileService:
    """Service for user profiles and admin user management"""
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db.users
    
    @staticmethod
    def to_profile(user: Dict) -> Dict:
        """Public view of the caller's own record"""
        return {
            "email": user["email"],
            "name": user.get("name"),
            "role": user.get("role"),
            "photoURL": user.get("photoURL"),
            "bio": user.get("bio") or "",
            "contestLimit": user.get("contestLimit"),
            "package": user.get("package")
        }
    
    async def get_profile(self, email: str) -> Dict:
        user = await self.users.find_one({"email": email})
        if not user:
            raise NotFound("User not found")
        return self.to_profile(user)
    
    async def update_profile(self, email: str, profile_data: ProfileUpdate) -> Dict:
        """
        Partial update of the caller's profile.
        
        Only non-empty supplied fields are written; everything else is left
        untouched.
        """
        update_fields = {}
        if profile_data.name:
            update_fields["name"] = profile_data.name
        if profile_data.photo_url:
            update_fields["photoURL"] = profile_data.photo_url
        if profile_data.bio:
            update_fields["bio"] = profile_data.bio
        
        if not update_fields:
            return await self.get_profile(email)
        
        user = await self.users.find_one_and_update(
            {"email": email},
            {"$set": update_fields},
            return_document=ReturnDocument.AFTER
        )
        if not user:
            raise NotFound("User not found")
        
        return self.to_profile(user)
    
    async def list_users(self) -> List[Dict]:
        """All user records"""
        return await self.users.find({}).to_list(length=None)
    
    async def set_role(self, user_id: str, role: str) -> Dict:
        """Overwrite a user's role (admins may change their own role too)"""
        oid = parse_object_id(user_id, "user ID")
        try:
            new_role = Role(role)
        except ValueError:
            raise InvalidInput(f"Invalid role: {role}")
        
        user = await self.users.find_one_and_update(
            {"_id": oid},
            {"$set": {"role": new_role.value}},
            return_document=ReturnDocument.AFTER
        )
        if not user:
            raise NotFound("User not found")
        
        return user
