from pydantic import BaseModel, EmailStr, Field, AliasChoices
from typing import Optional
from datetime import datetime
from app.models.user import UserRole, UserStatus


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    gst_no: Optional[str] = Field(default=None, validation_alias=AliasChoices("gstNo", "gst_no"))
    shop_name: str = Field(..., min_length=1, validation_alias=AliasChoices("shopName", "shop_name"))
    address: str
    phone: Optional[str] = None
    # Optional for compatibility with clients that register without one
    password: Optional[str] = Field(default=None, min_length=6)


class UserLogin(BaseModel):
    email: EmailStr
    password: Optional[str] = None


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(..., validation_alias=AliasChoices("refreshToken", "refresh_token"))


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    status: UserStatus
    gst_no: Optional[str] = None
    shop_name: Optional[str] = None
    address: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    id: str
    message: str


class LoginResponse(BaseModel):
    user: UserResponse
    token: str
    refreshToken: str


class TokenResponse(BaseModel):
    token: str
    refreshToken: str
