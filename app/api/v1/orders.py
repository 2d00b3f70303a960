from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.api.deps import get_current_user, require_admin, ensure_self_or_admin
from app.schemas.common import MessageResponse
from app.schemas.order import (
    OrderCreate, OrderCreateResponse, OrderStatusUpdate, OrderResponse,
    OrderListResponse, OrderStatusHistoryResponse
)
from app.services.order_service import (
    place_order, advance_status, get_order, list_orders, get_status_history
)
from app.exceptions import PermissionDeniedError
from app.models.order import Order
from app.models.user import User

router = APIRouter()


def _check_order_access(order: Order, current_user: User):
    if not current_user.is_admin and str(order.user_id) != str(current_user.id):
        raise PermissionDeniedError("You can only access your own orders")


@router.post("", response_model=OrderCreateResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Place an order; stock is reserved atomically for every line"""
    user_id = ensure_self_or_admin(current_user, order_data.user_id)
    items = [{"product_id": item.product_id, "quantity": item.quantity} for item in order_data.items]

    order = place_order(db, user_id, items, placed_by=str(current_user.id))

    return OrderCreateResponse(
        id=str(order.id),
        totalAmount=float(order.total_amount),
        message="Order created successfully"
    )


@router.get("", response_model=List[OrderListResponse])
def get_orders(
    userId: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List orders newest first; sellers only see their own"""
    user_id = userId if current_user.is_admin else ensure_self_or_admin(current_user, userId)

    return [
        OrderListResponse(
            id=str(o.id),
            user_id=str(o.user_id),
            user_name=o.user.name if o.user else None,
            shop_name=o.user.shop_name if o.user else None,
            total_amount=float(o.total_amount),
            status=o.status,
            created_at=o.created_at
        )
        for o in list_orders(db, user_id=user_id, status=status)
    ]


@router.get("/{order_id}", response_model=OrderResponse)
def get_order_details(
    order_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Order with its items"""
    order = get_order(db, order_id)
    _check_order_access(order, current_user)
    return OrderResponse.model_validate(order)


@router.get("/{order_id}/history", response_model=List[OrderStatusHistoryResponse])
def get_order_history(
    order_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Status changes of an order, oldest first"""
    _check_order_access(get_order(db, order_id), current_user)
    return get_status_history(db, order_id)


@router.put("/{order_id}/status", response_model=MessageResponse)
def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Advance an order's status (admin)"""
    order = advance_status(db, order_id, body.status, changed_by=str(admin.id), notes=body.notes)
    return MessageResponse(success=True, message=f"Order status updated to {order.status.value}")
