from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from contesthub.database import get_database
from contesthub.models.auth.token import TokenData
from contesthub.models.payment.package import BuyPackageRequest
from contesthub.services.payment.package_service import PackageService
from contesthub.routes.auth.dependencies import get_current_user
from contesthub.utils.response import success_response

router = APIRouter(tags=["Packages"])


@router.get("/packages")
async def list_packages(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Available contest packages"""
    return success_response(
        message="Packages retrieved successfully",
        data={"packages": PackageService(db).list_packages()}
    )


@router.post("/users/buy-package")
async def buy_package(
    package_data: BuyPackageRequest,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Apply a package's contest limit to the current user"""
    result = await PackageService(db).buy_package(current_user.email, package_data.package_id)
    
    return success_response(message="Package purchased successfully", data=result)
