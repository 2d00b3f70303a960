from pydantic import BaseModel, Field, AliasChoices
from typing import Optional
from app.schemas.user import UserResponse


class SellerVerify(BaseModel):
    user_id: str = Field(..., validation_alias=AliasChoices("userId", "user_id"))
    # Checked by the service so an unknown decision is a 400, not a 422
    status: str
    rejection_reason: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("rejectionReason", "rejection_reason")
    )


class PendingSellerResponse(UserResponse):
    pending_docs: int = 0
    approved_docs: int = 0


class DashboardStats(BaseModel):
    totalSellers: int
    pendingSellers: int
    totalProducts: int
    totalOrders: int
    pendingOrders: int
    totalRevenue: float
