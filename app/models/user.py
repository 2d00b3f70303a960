from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from app.database import Base
from app.models.types import EnumValueType


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    SELLER = "seller"


class UserStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class User(Base):
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    # Accounts registered without a password have no hash (see auth_service.authenticate_user)
    password_hash = Column(String(255), nullable=True)
    role = Column(EnumValueType(UserRole), default=UserRole.SELLER, nullable=False)
    gst_no = Column(String(15), nullable=True)
    shop_name = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    status = Column(EnumValueType(UserStatus), default=UserStatus.PENDING, nullable=False, index=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships
    kyc_documents = relationship("KYCDocument", back_populates="user", order_by="KYCDocument.created_at")
    orders = relationship("Order", back_populates="user")
    products = relationship("Product", back_populates="seller")
    
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
