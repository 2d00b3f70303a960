from pydantic import BaseModel, Field, AliasChoices
from typing import Optional
from datetime import datetime


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    image_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("image_url", "imageUrl"))


class CategoryResponse(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True
