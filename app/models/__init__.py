from app.models.user import User
from app.models.category import Category
from app.models.product import Product
from app.models.kyc_document import KYCDocument
from app.models.order import Order, OrderItem
from app.models.order_status_history import OrderStatusHistory

__all__ = [
    "User",
    "Category",
    "Product",
    "KYCDocument",
    "Order",
    "OrderItem",
    "OrderStatusHistory",
]
