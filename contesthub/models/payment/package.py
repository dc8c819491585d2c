"""
Contest Packages
Predefined tiers that set how many contests a creator may post
"""
from pydantic import BaseModel, Field
from typing import Optional


class Package(BaseModel):
    """Contest posting package"""
    id: str
    name: str
    price: float
    limit: int
    description: str = ""


class BuyPackageRequest(BaseModel):
    """Schema for buying a package"""
    package_id: Optional[str] = Field(None, alias="packageId")
    
    class Config:
        populate_by_name = True


class PaymentIntentRequest(BaseModel):
    """Schema for creating a payment intent"""
    price: Optional[float] = None
    package_id: Optional[str] = Field(None, alias="packageId")
    
    class Config:
        populate_by_name = True
