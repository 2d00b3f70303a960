"""
Admin moderation of sellers and the admin dashboard figures
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError, StoreError, ValidationError
from app.models.kyc_document import DocumentStatus, KYCDocument
from app.models.order import Order, OrderStatus
from app.models.product import Product
from app.models.user import User, UserRole, UserStatus

logger = logging.getLogger(__name__)

SELLER_DECISIONS = (UserStatus.VERIFIED, UserStatus.REJECTED)


def parse_user_status(value) -> UserStatus:
    if isinstance(value, UserStatus):
        return value
    try:
        return UserStatus(str(value).lower())
    except ValueError:
        allowed = ", ".join(s.value for s in UserStatus)
        raise ValidationError(f"Invalid seller status '{value}'. Allowed: {allowed}")


def moderate_seller(
    db: Session,
    user_id: str,
    decision,
    reason: Optional[str] = None
) -> Tuple[User, int]:
    """
    Set a seller's status directly.
    
    Rejecting a seller also rejects every one of their documents still
    pending; approved documents are left alone. Returns the user and the
    number of documents the rejection cascaded to.
    """
    status = parse_user_status(decision)
    if status not in SELLER_DECISIONS:
        raise ValidationError("Status must be 'verified' or 'rejected'")
    
    user = db.query(User).filter(User.id == str(user_id)).first()
    if not user:
        raise NotFoundError("User not found")
    if user.role != UserRole.SELLER:
        raise ValidationError("Only sellers can be moderated")
    
    cascaded = 0
    try:
        user.status = status
        user.rejection_reason = reason if status == UserStatus.REJECTED else None
        
        if status == UserStatus.REJECTED:
            result = db.execute(
                update(KYCDocument)
                .where(KYCDocument.user_id == user.id, KYCDocument.status == DocumentStatus.PENDING)
                .values(
                    status=DocumentStatus.REJECTED,
                    rejection_reason=reason,
                    reviewed_at=datetime.utcnow()
                )
                .execution_options(synchronize_session=False)
            )
            cascaded = result.rowcount
        
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to moderate seller {user_id}: {e}", exc_info=True)
        raise StoreError("Failed to update seller") from e
    
    db.refresh(user)
    logger.info(f"Seller {user.id} {status.value} ({cascaded} pending documents rejected)")
    return user, cascaded


def list_sellers(db: Session, status: Optional[str] = None) -> List[User]:
    query = db.query(User).filter(User.role == UserRole.SELLER)
    if status:
        query = query.filter(User.status == parse_user_status(status))
    return query.order_by(User.created_at.desc()).all()


def list_pending_sellers(db: Session) -> List[Tuple[User, int, int]]:
    """Pending sellers with their pending and approved document counts"""
    pending_docs = (
        db.query(func.count(KYCDocument.id))
        .filter(KYCDocument.user_id == User.id, KYCDocument.status == DocumentStatus.PENDING)
        .correlate(User)
        .scalar_subquery()
    )
    approved_docs = (
        db.query(func.count(KYCDocument.id))
        .filter(KYCDocument.user_id == User.id, KYCDocument.status == DocumentStatus.APPROVED)
        .correlate(User)
        .scalar_subquery()
    )
    rows = (
        db.query(User, pending_docs, approved_docs)
        .filter(User.role == UserRole.SELLER, User.status == UserStatus.PENDING)
        .order_by(User.created_at.desc())
        .all()
    )
    return [(user, pending or 0, approved or 0) for user, pending, approved in rows]


def dashboard_stats(db: Session) -> dict:
    """Headline counts for the admin dashboard"""
    sellers = db.query(User).filter(User.role == UserRole.SELLER)
    orders = db.query(Order)
    revenue = db.query(func.coalesce(func.sum(Order.total_amount), 0)).filter(
        Order.status != OrderStatus.CANCELLED
    ).scalar()
    
    return {
        "totalSellers": sellers.count(),
        "pendingSellers": sellers.filter(User.status == UserStatus.PENDING).count(),
        "totalProducts": db.query(func.count(Product.id)).scalar() or 0,
        "totalOrders": orders.count(),
        "pendingOrders": orders.filter(Order.status == OrderStatus.PENDING).count(),
        "totalRevenue": float(revenue or 0),
    }
