from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime
import enum
from app.database import Base
from app.models.types import EnumValueType


class DocumentType(str, enum.Enum):
    GST = "gst"
    SHOP_LICENSE = "shop_license"
    AADHAAR = "aadhaar"
    PAN = "pan"
    OTHER = "other"


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class KYCDocument(Base):
    __tablename__ = "kyc_documents"
    
    # One row per upload; a re-upload of the same type adds a new row
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    document_type = Column(EnumValueType(DocumentType), nullable=False)
    document_url = Column(String(500), nullable=False)
    status = Column(EnumValueType(DocumentStatus), default=DocumentStatus.PENDING, nullable=False, index=True)
    rejection_reason = Column(Text, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    user = relationship("User", back_populates="kyc_documents")
