from pydantic import BaseModel, Field, AliasChoices
from typing import List, Optional
from datetime import datetime
from app.models.order import OrderStatus


class OrderItemCreate(BaseModel):
    product_id: str = Field(..., validation_alias=AliasChoices("productId", "product_id"))
    # Positivity is enforced by the order service (400, not 422)
    quantity: int


class OrderCreate(BaseModel):
    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("userId", "user_id"))
    items: List[OrderItemCreate]


class OrderCreateResponse(BaseModel):
    id: str
    totalAmount: float
    message: str


class OrderStatusUpdate(BaseModel):
    status: str
    notes: Optional[str] = None


class OrderItemResponse(BaseModel):
    id: str
    product_id: Optional[str] = None
    quantity: int
    price: float
    product_name: Optional[str] = None
    image_url: Optional[str] = None
    
    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: str
    user_id: str
    total_amount: float
    status: OrderStatus
    # The relationship is `order_items`; clients read it as `items`
    items: List[OrderItemResponse] = Field(default_factory=list, validation_alias="order_items")
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class OrderListResponse(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    shop_name: Optional[str] = None
    total_amount: float
    status: OrderStatus
    created_at: datetime


class OrderStatusHistoryResponse(BaseModel):
    id: str
    from_status: Optional[OrderStatus] = None
    status: OrderStatus
    changed_by: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True
