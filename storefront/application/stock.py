from sqlalchemy.orm import Session

from storefront.domain.enums import ProductStatus
from storefront.domain.errors import InsufficientStock, ProductUnavailable
from storefront.domain.models import Product, SizeStock

def validate_stock(product: Product, size: str, quantity: int) -> SizeStock:
    """Advisory pre-check; the conditional decrement is what actually reserves stock."""
    # Drafts and archived products are as unorderable as inactive ones
    if not product.is_active or product.status != ProductStatus.PUBLISHED.value:
        raise ProductUnavailable(product.title)
    entry = product.size_stock(size)
    available = entry.stock if entry else 0
    if entry is None or entry.stock < quantity:
        raise InsufficientStock(product.title, size, quantity, available)
    return entry

def decrement_stock(db: Session, product_id: str, size: str, quantity: int) -> bool:
    """Take ``quantity`` off a size only if that much is left. Returns False when nothing matched."""
    matched = db.query(SizeStock).filter(
        SizeStock.product_id == product_id,
        SizeStock.size == size,
        SizeStock.stock >= quantity,
    ).update(
        {
            SizeStock.stock: SizeStock.stock - quantity,
            SizeStock.in_stock: (SizeStock.stock - quantity) > 0,
        },
        synchronize_session=False,
    )
    return matched == 1

def available_stock(db: Session, product_id: str, size: str) -> int:
    stock = db.query(SizeStock.stock).filter(
        SizeStock.product_id == product_id,
        SizeStock.size == size,
    ).scalar()
    return stock or 0
