from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Dict, Optional
from pymongo import ReturnDocument

from contesthub.models.payment.package import Package
from contesthub.utils.errors import InvalidInput, NotFound


# Static catalog - packages are not stored in the database
PACKAGES: List[Package] = [
    Package(
        id="starter",
        name="Starter",
        price=0,
        limit=2,
        description="Post up to 2 contests"
    ),
    Package(
        id="pro",
        name="Pro",
        price=10,
        limit=10,
        description="Post up to 10 contests"
    ),
    Package(
        id="ultimate",
        name="Ultimate",
        price=25,
        limit=100,
        description="Post up to 100 contests"
    ),
]


def find_package(package_id: Optional[str]) -> Package:
    """Look up a catalog package by id"""
    for package in PACKAGES:
        if package.id == package_id:
            return package
    raise InvalidInput("Invalid package")


class PackageService:
    """Service for contest posting packages"""
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db.users
    
    def list_packages(self) -> List[Dict]:
        return [package.model_dump() for package in PACKAGES]
    
    async def buy_package(self, email: str, package_id: Optional[str]) -> Dict:
        """
        Grant the package's contest limit to the user.
        
        Payment is confirmed by the client through the payment intent flow;
        this only records the tier and quota.
        """
        package = find_package(package_id)
        
        user = await self.users.find_one_and_update(
            {"email": email},
            {"$set": {"contestLimit": package.limit, "package": package.id}},
            return_document=ReturnDocument.AFTER
        )
        if not user:
            raise NotFound("User not found")
        
        return {
            "package": package.id,
            "contestLimit": user["contestLimit"]
        }
