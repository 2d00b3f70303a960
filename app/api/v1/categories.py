from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.database import get_db
from app.api.deps import require_admin
from app.schemas.category import CategoryCreate, CategoryResponse
from app.schemas.common import MessageResponse
from app.services import catalog_service
from app.models.user import User

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    """All categories ordered by name"""
    return catalog_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, db: Session = Depends(get_db)):
    return catalog_service.get_category(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return catalog_service.create_category(db, body.name, body.image_url)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    body: CategoryCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return catalog_service.update_category(db, category_id, body.name, body.image_url)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    catalog_service.delete_category(db, category_id)
    return MessageResponse(success=True, message="Category deleted")
