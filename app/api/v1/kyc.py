from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.api.deps import get_current_user, require_admin, ensure_self_or_admin
from app.exceptions import ValidationError
from app.schemas.common import MessageResponse
from app.schemas.kyc import (
    DocumentVerify, DocumentUploadResponse, KYCDocumentResponse, PendingDocumentResponse
)
from app.services.kyc_service import (
    submit_document, moderate_document, list_user_documents, list_pending_documents
)
from app.models.user import User
from app.utils.storage import BlobStore, get_blob_store

router = APIRouter()


@router.post("/upload", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    userId: Optional[str] = Form(None),
    documentType: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Upload a KYC document (multipart: userId, documentType, file)"""
    if not userId or not documentType or file is None:
        raise ValidationError("Missing required fields")

    user_id = ensure_self_or_admin(current_user, userId)
    content = await file.read()
    document = submit_document(db, blob_store, user_id, documentType, file.filename, content)

    return DocumentUploadResponse(
        id=str(document.id),
        documentUrl=document.document_url,
        message="Document uploaded successfully"
    )


@router.get("/pending", response_model=List[PendingDocumentResponse])
def get_pending_documents(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Pending documents with the owner's name, email and shop"""
    return [
        PendingDocumentResponse(
            **KYCDocumentResponse.model_validate(document).model_dump(),
            name=user.name,
            email=user.email,
            shop_name=user.shop_name
        )
        for document, user in list_pending_documents(db)
    ]


@router.get("/user/{user_id}", response_model=List[KYCDocumentResponse])
def get_user_documents(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All documents uploaded by a user"""
    return list_user_documents(db, ensure_self_or_admin(current_user, user_id))


@router.post("/verify", response_model=MessageResponse)
def verify_document(
    body: DocumentVerify,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Approve or reject a pending document"""
    document = moderate_document(db, body.document_id, body.status, body.rejection_reason)
    return MessageResponse(success=True, message=f"Document {document.status.value}")
