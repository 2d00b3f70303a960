import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import AuthenticationError, ConflictError, NotFoundError, StoreError
from app.models.user import User, UserRole, UserStatus
from app.schemas.user import UserRegister
from app.utils.security import (
    REFRESH_TOKEN_TYPE, create_access_token, create_refresh_token, get_password_hash,
    verify_password, verify_token
)

logger = logging.getLogger(__name__)


def register_user(db: Session, user_data: UserRegister) -> User:
    """Register a new seller with status = 'pending'"""
    if db.query(User).filter(User.email == user_data.email).first():
        raise ConflictError("Email already registered")
    
    user = User(
        name=user_data.name,
        email=user_data.email,
        phone=user_data.phone,
        password_hash=get_password_hash(user_data.password) if user_data.password else None,
        role=UserRole.SELLER,
        gst_no=user_data.gst_no,
        shop_name=user_data.shop_name,
        address=user_data.address,
        status=UserStatus.PENDING
    )
    
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ConflictError("Email already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to register {user_data.email}: {e}", exc_info=True)
        raise StoreError("Failed to register user") from e
    
    db.refresh(user)
    logger.info(f"Seller {user.id} registered")
    return user


def authenticate_user(db: Session, email: str, password: Optional[str]) -> User:
    """
    Look up a user by email and check their password.
    
    Accounts registered without a password are matched on email alone.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User not found")
    
    if user.password_hash and not verify_password(password or "", user.password_hash):
        raise AuthenticationError("Invalid email or password")
    
    return user


def create_tokens(user: User) -> dict:
    """Create access and refresh tokens for user"""
    claims = {"sub": str(user.id), "email": user.email, "role": user.role.value}
    return {
        "token": create_access_token(data=claims),
        "refresh_token": create_refresh_token(data=claims)
    }


def refresh_access_token(db: Session, refresh_token: str) -> dict:
    user_id = verify_token(refresh_token, token_type=REFRESH_TOKEN_TYPE)
    if not user_id:
        raise AuthenticationError("Invalid or expired refresh token")
    
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthenticationError("Invalid or expired refresh token")
    
    return create_tokens(user)


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == str(user_id)).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def create_admin(db: Session, email: str, password: str, name: str = "Admin") -> User:
    """Create an admin account (used by create_admin.py)"""
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")
    
    admin = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=UserRole.ADMIN,
        status=UserStatus.VERIFIED
    )
    db.add(admin)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("Failed to create admin") from e
    db.refresh(admin)
    return admin


def ensure_admin(db: Session, email: str, password: str, name: str = "Admin") -> Optional[User]:
    """Create the configured admin on startup unless the email is already taken"""
    if not email or not password:
        return None
    if db.query(User).filter(User.email == email).first():
        return None
    admin = create_admin(db, email=email, password=password, name=name)
    logger.info(f"Admin account {admin.email} created from settings")
    return admin
