from pydantic import BaseModel, Field, AliasChoices
from typing import Optional
from datetime import datetime
from app.models.kyc_document import DocumentStatus, DocumentType


class DocumentVerify(BaseModel):
    document_id: str = Field(..., validation_alias=AliasChoices("documentId", "document_id"))
    # Checked by the service so an unknown decision is a 400, not a 422
    status: str
    rejection_reason: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("rejectionReason", "rejection_reason")
    )


class DocumentUploadResponse(BaseModel):
    id: str
    documentUrl: str
    message: str


class KYCDocumentResponse(BaseModel):
    id: str
    user_id: str
    document_type: DocumentType
    document_url: str
    status: DocumentStatus
    rejection_reason: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class PendingDocumentResponse(KYCDocumentResponse):
    name: str
    email: str
    shop_name: Optional[str] = None
