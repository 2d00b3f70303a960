from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from app.database import get_db
from app.api.deps import require_admin
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse, ImageUploadResponse
from app.schemas.common import MessageResponse
from app.services import catalog_service
from app.models.product import Product
from app.models.user import User
from app.utils.storage import BlobStore, get_blob_store, validate_upload

router = APIRouter()


def _product_response(product: Product, category_name: Optional[str] = None) -> ProductResponse:
    response = ProductResponse.model_validate(product)
    if category_name is None and product.category is not None:
        category_name = product.category.name
    response.category_name = category_name
    return response


@router.get("", response_model=List[ProductResponse])
def list_products(
    categoryId: Optional[str] = Query(None),
    sellerId: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List products, optionally by category and/or seller"""
    return [
        _product_response(product, category_name)
        for product, category_name in catalog_service.list_products(db, categoryId, sellerId)
    ]


# Declared before /{product_id} so the literal path wins
@router.post("/upload-image", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_product_image(
    file: UploadFile = File(...),
    admin: User = Depends(require_admin),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """Upload a product image and return its URL"""
    content = await file.read()
    safe_name = validate_upload(file.filename, content)
    timestamp = int(datetime.utcnow().timestamp() * 1000)
    image_url = blob_store.put(f"products/{timestamp}-{safe_name}", content)
    return ImageUploadResponse(imageUrl=image_url)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, db: Session = Depends(get_db)):
    return _product_response(catalog_service.get_product(db, product_id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    product = catalog_service.create_product(db, body.model_dump())
    return _product_response(product)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: ProductUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    product = catalog_service.update_product(db, product_id, body.model_dump())
    return _product_response(product)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    catalog_service.delete_product(db, product_id)
    return MessageResponse(success=True, message="Product deleted")
