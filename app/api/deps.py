from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.database import get_db
from app.exceptions import AuthenticationError, PermissionDeniedError
from app.utils.security import verify_token
from app.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from the bearer token"""
    if not token:
        raise AuthenticationError("Not authenticated")
    
    user_id = verify_token(token)
    if user_id is None:
        raise AuthenticationError("Could not validate credentials")
    
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise AuthenticationError("Could not validate credentials")
    
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require an admin account"""
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return current_user


def ensure_self_or_admin(current_user: User, user_id: Optional[str]) -> str:
    """Resolve the user a request acts on; sellers may only act on themselves"""
    target = str(user_id) if user_id else str(current_user.id)
    if not current_user.is_admin and target != str(current_user.id):
        raise PermissionDeniedError("You can only access your own records")
    return target
