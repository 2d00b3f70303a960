from pydantic import BaseModel, Field, AliasChoices
from typing import Optional
from datetime import datetime
from decimal import Decimal


class ProductBase(BaseModel):
    category_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("categoryId", "category_id"))
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    unit: Optional[str] = None
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("imageUrl", "image_url"))
    stock: int = Field(0, ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0, le=100)


class ProductCreate(ProductBase):
    seller_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("sellerId", "seller_id"))


class ProductUpdate(ProductBase):
    """Full replacement of the product's fields"""
    pass


class ProductResponse(BaseModel):
    id: str
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    name: str
    description: Optional[str] = None
    price: float
    unit: Optional[str] = None
    image_url: Optional[str] = None
    stock: int
    discount: float
    seller_id: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class ImageUploadResponse(BaseModel):
    imageUrl: str
