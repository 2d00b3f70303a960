"""
Seller onboarding: KYC document submission, document moderation and the
seller status derived from the full set of a seller's documents.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import AppError, InvalidTransitionError, NotFoundError, StoreError, ValidationError
from app.models.kyc_document import DocumentStatus, DocumentType, KYCDocument
from app.models.user import User, UserStatus
from app.utils.storage import BlobStore, validate_upload

logger = logging.getLogger(__name__)

MODERATION_DECISIONS = (DocumentStatus.APPROVED, DocumentStatus.REJECTED)


def parse_document_type(value) -> DocumentType:
    if isinstance(value, DocumentType):
        return value
    try:
        return DocumentType(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in DocumentType)
        raise ValidationError(f"Invalid document type '{value}'. Allowed: {allowed}")


def build_document_path(user_id: str, document_type: DocumentType, filename: str, now: Optional[datetime] = None) -> str:
    """Blob path for an upload; unique per call so re-uploads never overwrite"""
    timestamp = int((now or datetime.utcnow()).timestamp() * 1000)
    return f"kyc/{user_id}/{document_type.value}-{timestamp}-{uuid.uuid4().hex[:8]}-{filename}"


def submit_document(
    db: Session,
    blob_store: BlobStore,
    user_id: str,
    document_type,
    filename: Optional[str],
    content: bytes
) -> KYCDocument:
    """Store the file and record a new pending document for the user"""
    doc_type = parse_document_type(document_type)
    safe_name = validate_upload(filename, content)
    
    user = db.query(User).filter(User.id == str(user_id)).first()
    if not user:
        raise NotFoundError("User not found")
    
    blob_path = build_document_path(user.id, doc_type, safe_name)
    document_url = blob_store.put(blob_path, content)
    
    document = KYCDocument(
        user_id=user.id,
        document_type=doc_type,
        document_url=document_url,
        status=DocumentStatus.PENDING
    )
    try:
        db.add(document)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save KYC document for user {user_id}: {e}", exc_info=True)
        blob_store.delete(blob_path)
        raise StoreError("Failed to save document") from e
    
    db.refresh(document)
    logger.info(f"KYC document {document.id} ({doc_type.value}) uploaded for user {user.id}")
    return document


def count_documents(db: Session, user_id: str) -> Tuple[int, int]:
    """(approved, total) document counts for a user"""
    total = db.query(func.count(KYCDocument.id)).filter(KYCDocument.user_id == user_id).scalar() or 0
    approved = db.query(func.count(KYCDocument.id)).filter(
        KYCDocument.user_id == user_id,
        KYCDocument.status == DocumentStatus.APPROVED
    ).scalar() or 0
    return approved, total


def recompute_user_status(db: Session, user_id: str) -> Optional[UserStatus]:
    """
    Promote the user to verified once every one of their documents is approved.
    
    Never demotes: a rejected document leaves the user status alone; only
    seller moderation rejects a seller. Does not commit.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None
    
    approved, total = count_documents(db, user_id)
    if total > 0 and approved == total and user.status != UserStatus.VERIFIED:
        user.status = UserStatus.VERIFIED
        user.rejection_reason = None
        logger.info(f"User {user_id} verified: all {total} KYC documents approved")
    return user.status


def moderate_document(
    db: Session,
    document_id: str,
    decision,
    reason: Optional[str] = None
) -> KYCDocument:
    """Approve or reject a pending document and refresh the owner's status"""
    if isinstance(decision, DocumentStatus):
        status = decision
    else:
        try:
            status = DocumentStatus(str(decision).lower())
        except ValueError:
            status = None
    if status not in MODERATION_DECISIONS:
        raise ValidationError("Status must be 'approved' or 'rejected'")
    
    document = db.query(KYCDocument).filter(KYCDocument.id == str(document_id)).first()
    if not document:
        raise NotFoundError("Document not found")
    
    if document.status != DocumentStatus.PENDING:
        raise InvalidTransitionError(f"Document is already {document.status.value}")
    
    try:
        document.status = status
        document.rejection_reason = reason if status == DocumentStatus.REJECTED else None
        document.reviewed_at = datetime.utcnow()
        db.flush()
        
        recompute_user_status(db, document.user_id)
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to moderate document {document_id}: {e}", exc_info=True)
        raise StoreError("Failed to update document") from e
    
    db.refresh(document)
    logger.info(f"KYC document {document.id} {status.value}")
    return document


def list_user_documents(db: Session, user_id: str) -> List[KYCDocument]:
    return (
        db.query(KYCDocument)
        .filter(KYCDocument.user_id == str(user_id))
        .order_by(KYCDocument.created_at)
        .all()
    )


def list_pending_documents(db: Session) -> List[Tuple[KYCDocument, User]]:
    """Pending documents together with their owners, oldest first"""
    return (
        db.query(KYCDocument, User)
        .join(User, KYCDocument.user_id == User.id)
        .filter(KYCDocument.status == DocumentStatus.PENDING)
        .order_by(KYCDocument.created_at)
        .all()
    )
