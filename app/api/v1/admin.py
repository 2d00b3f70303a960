"""
Admin seller moderation and dashboard endpoints
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.api.deps import require_admin
from app.schemas.admin import SellerVerify, PendingSellerResponse, DashboardStats
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.services.seller_service import (
    moderate_seller, list_sellers, list_pending_sellers, dashboard_stats
)
from app.models.user import User

router = APIRouter()


@router.get("/sellers", response_model=List[UserResponse])
def get_sellers(
    status: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """All sellers, newest first"""
    return list_sellers(db, status)


@router.get("/pending-sellers", response_model=List[PendingSellerResponse])
def get_pending_sellers(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Sellers awaiting verification with their document counts"""
    return [
        PendingSellerResponse(
            **UserResponse.model_validate(user).model_dump(),
            pending_docs=pending_docs,
            approved_docs=approved_docs
        )
        for user, pending_docs, approved_docs in list_pending_sellers(db)
    ]


@router.post("/verify-seller", response_model=MessageResponse)
def verify_seller(
    body: SellerVerify,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Verify or reject a seller; rejection also rejects their pending documents"""
    user, _ = moderate_seller(db, body.user_id, body.status, body.rejection_reason)
    return MessageResponse(success=True, message=f"Seller {user.status.value}")


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return DashboardStats(**dashboard_stats(db))
