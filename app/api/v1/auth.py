from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.api.deps import get_current_user, ensure_self_or_admin
from app.schemas.user import (
    UserRegister, UserLogin, RefreshTokenRequest, UserResponse,
    RegisterResponse, LoginResponse, TokenResponse
)
from app.services.auth_service import (
    register_user, authenticate_user, create_tokens, refresh_access_token, get_user
)
from app.models.user import User

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """Register a new seller (status = 'pending')"""
    user = register_user(db, user_data)
    return RegisterResponse(
        id=str(user.id),
        message="Registration successful. Please upload KYC documents."
    )


@router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with email (and password, when the account has one)"""
    user = authenticate_user(db, email=credentials.email, password=credentials.password)
    tokens = create_tokens(user)
    return LoginResponse(
        user=UserResponse.model_validate(user),
        token=tokens["token"],
        refreshToken=tokens["refresh_token"]
    )


@router.post("/refresh", response_model=TokenResponse)
def refresh(body: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new token pair"""
    tokens = refresh_access_token(db, body.refresh_token)
    return TokenResponse(token=tokens["token"], refreshToken=tokens["refresh_token"])


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/user/{user_id}", response_model=UserResponse)
def get_user_by_id(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a user record (own record, or any record for admins)"""
    return get_user(db, ensure_self_or_admin(current_user, user_id))
