"""
Category and product CRUD
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import NotFoundError, StoreError, ValidationError
from app.models.category import Category
from app.models.product import Product
from app.models.user import User

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("category_id", "name", "description", "price", "unit", "image_url", "stock", "discount")


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise StoreError(f"Failed to {action}") from e


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: str) -> Category:
    category = db.query(Category).filter(Category.id == str(category_id)).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def create_category(db: Session, name: str, image_url: Optional[str] = None) -> Category:
    category = Category(name=name, image_url=image_url)
    db.add(category)
    _commit(db, "create category")
    db.refresh(category)
    return category


def update_category(db: Session, category_id: str, name: str, image_url: Optional[str] = None) -> Category:
    category = get_category(db, category_id)
    category.name = name
    category.image_url = image_url
    _commit(db, "update category")
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: str) -> None:
    """Delete a category; its products are kept without a category"""
    category = get_category(db, category_id)
    db.delete(category)
    _commit(db, "delete category")
    logger.info(f"Category {category_id} deleted")


def _check_references(db: Session, category_id: Optional[str], seller_id: Optional[str] = None):
    if category_id and not db.query(Category.id).filter(Category.id == str(category_id)).first():
        raise ValidationError(f"Category {category_id} does not exist")
    if seller_id and not db.query(User.id).filter(User.id == str(seller_id)).first():
        raise ValidationError(f"Seller {seller_id} does not exist")


def list_products(
    db: Session,
    category_id: Optional[str] = None,
    seller_id: Optional[str] = None
) -> List[Tuple[Product, Optional[str]]]:
    """Products with their category name"""
    query = db.query(Product, Category.name).outerjoin(Category, Product.category_id == Category.id)
    
    if category_id:
        query = query.filter(Product.category_id == str(category_id))
    if seller_id:
        query = query.filter(Product.seller_id == str(seller_id))
    
    return query.order_by(Product.created_at.desc()).all()


def get_product(db: Session, product_id: str) -> Product:
    product = db.query(Product).filter(Product.id == str(product_id)).first()
    if not product:
        raise NotFoundError("Product not found")
    return product


def create_product(db: Session, data: dict) -> Product:
    _check_references(db, data.get("category_id"), data.get("seller_id"))
    
    product = Product(seller_id=data.get("seller_id"), **{field: data.get(field) for field in PRODUCT_FIELDS})
    db.add(product)
    _commit(db, "create product")
    db.refresh(product)
    logger.info(f"Product {product.id} created")
    return product


def update_product(db: Session, product_id: str, data: dict) -> Product:
    """Replace every scalar field of a product; the seller is not reassigned"""
    product = get_product(db, product_id)
    _check_references(db, data.get("category_id"))
    
    for field in PRODUCT_FIELDS:
        setattr(product, field, data.get(field))
    _commit(db, "update product")
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: str) -> None:
    product = get_product(db, product_id)
    db.delete(product)
    _commit(db, "delete product")
    logger.info(f"Product {product_id} deleted")
