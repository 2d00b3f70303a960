"""
Order placement and status workflow.

Placing an order decrements stock with a conditional UPDATE per line, so two
concurrent orders can never drive a product's stock below zero. The order,
its items, the stock decrements and the first history entry are committed
together or not at all.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from app.exceptions import (
    AppError, InsufficientStockError, InvalidTransitionError, NotFoundError,
    PermissionDeniedError, StoreError, ValidationError
)
from app.models.order import Order, OrderItem, OrderStatus
from app.models.order_status_history import OrderStatusHistory
from app.models.product import Product
from app.models.user import User, UserStatus
from app.utils.discount import effective_unit_price, line_total, to_money

logger = logging.getLogger(__name__)

# Forward-only; delivered and cancelled are terminal
ORDER_TRANSITIONS: Dict[OrderStatus, frozenset] = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def parse_order_status(value) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).lower())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid order status '{value}'. Allowed: {allowed}")


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS[current]


def _normalize_items(items: List[dict]) -> List[Tuple[str, int]]:
    if not items:
        raise ValidationError("Order must contain at least one item")
    
    lines = []
    for index, item in enumerate(items, start=1):
        product_id = item.get("product_id")
        if not product_id:
            raise ValidationError(f"Item {index} is missing a product id")
        try:
            quantity = int(item.get("quantity"))
        except (TypeError, ValueError):
            raise ValidationError(f"Item {index} has an invalid quantity")
        if quantity <= 0:
            raise ValidationError(f"Quantity for product {product_id} must be greater than 0")
        lines.append((str(product_id), quantity))
    return lines


def place_order(db: Session, user_id: str, items: List[dict], placed_by: Optional[str] = None) -> Order:
    """
    Create a pending order from a cart of ``{"product_id", "quantity"}`` lines.
    
    Raises NotFoundError for an unknown product, InsufficientStockError when a
    line exceeds the available stock. Nothing is persisted on failure.
    """
    lines = _normalize_items(items)
    
    total_amount = Decimal("0.00")
    order_lines = []
    try:
        user = db.query(User).filter(User.id == str(user_id)).first()
        if not user:
            raise NotFoundError(f"User {user_id} not found", status_code=400)
        if user.status != UserStatus.VERIFIED:
            raise PermissionDeniedError("Seller account must be verified before placing orders")
        
        # Sequential so each product's check-and-decrement happens in cart order
        for product_id, quantity in lines:
            product = db.query(Product).filter(Product.id == product_id).first()
            if not product:
                raise NotFoundError(f"Product {product_id} not found", status_code=400)
            
            unit_price = effective_unit_price(product.price, product.discount)
            
            result = db.execute(
                update(Product)
                .where(Product.id == product_id, Product.stock >= quantity)
                .values(stock=Product.stock - quantity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                logger.warning(f"Insufficient stock for product {product_id}: requested {quantity}")
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name}",
                    details={"product_id": product_id, "requested": quantity}
                )
            
            total_amount += line_total(unit_price, quantity)
            order_lines.append(OrderItem(product_id=product_id, quantity=quantity, price=unit_price))
        
        order = Order(
            user_id=user.id,
            total_amount=to_money(total_amount),
            status=OrderStatus.PENDING,
        )
        order.order_items = order_lines
        order.status_history.append(
            OrderStatusHistory(from_status=None, status=OrderStatus.PENDING, changed_by=placed_by or user.id)
        )
        db.add(order)
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to place order for user {user_id}: {e}", exc_info=True)
        raise StoreError("Failed to place order") from e
    
    db.refresh(order)
    logger.info(f"Order {order.id} placed by user {user.id}: {len(order_lines)} items, total {order.total_amount}")
    return order


def advance_status(
    db: Session,
    order_id: str,
    new_status,
    changed_by: Optional[str] = None,
    notes: Optional[str] = None
) -> Order:
    """Move an order along the status graph in ORDER_TRANSITIONS"""
    target = parse_order_status(new_status)
    
    order = db.query(Order).filter(Order.id == str(order_id)).first()
    if not order:
        raise NotFoundError("Order not found")
    
    current = order.status
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot change order status from {current.value} to {target.value}",
            details={"current": current.value, "requested": target.value}
        )
    
    try:
        # Guard on the status we validated against
        result = db.execute(
            update(Order)
            .where(Order.id == order.id, Order.status == current)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise InvalidTransitionError("Order status was changed by another request")
        
        db.add(OrderStatusHistory(
            order_id=order.id,
            from_status=current,
            status=target,
            changed_by=changed_by,
            notes=notes
        ))
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update status of order {order_id}: {e}", exc_info=True)
        raise StoreError("Failed to update order status") from e
    
    db.refresh(order)
    logger.info(f"Order {order.id} status {current.value} -> {target.value}")
    return order


def get_order(db: Session, order_id: str) -> Order:
    order = (
        db.query(Order)
        .options(joinedload(Order.order_items).joinedload(OrderItem.product))
        .filter(Order.id == str(order_id))
        .first()
    )
    if not order:
        raise NotFoundError("Order not found")
    return order


def list_orders(db: Session, user_id: Optional[str] = None, status: Optional[str] = None) -> List[Order]:
    """Orders newest first, optionally filtered by owner and status"""
    query = db.query(Order).options(joinedload(Order.user))
    
    if user_id:
        query = query.filter(Order.user_id == str(user_id))
    if status:
        query = query.filter(Order.status == parse_order_status(status))
    
    return query.order_by(Order.created_at.desc()).all()


def get_status_history(db: Session, order_id: str) -> List[OrderStatusHistory]:
    order = get_order(db, order_id)
    return list(order.status_history)
