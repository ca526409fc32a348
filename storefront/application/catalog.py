"""Catalog lookup for the order workflow, plus admin maintenance of products."""

from sqlalchemy.orm import Session
from typing import Optional
import uuid

from shared.core import get_logger
from storefront.domain.enums import ProductStatus
from storefront.domain.errors import InvalidArgument, ProductNotFound
from storefront.domain.models import Product, SizeStock
from .schemas import ProductCreate, ProductUpdate, SizeStockIn

logger = get_logger(__name__)

def parse_id(value: Optional[str], label: str = "id") -> str:
    """Normalise an opaque id to its 32-char hex form; malformed ids raise InvalidArgument."""
    try:
        return uuid.UUID(str(value)).hex
    except (ValueError, TypeError):
        raise InvalidArgument(f"Invalid {label}: {value}")

class CatalogLookup:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: str) -> Product:
        product = self.db.get(Product, parse_id(product_id, "product id"))
        if not product:
            raise ProductNotFound(f"Product {product_id} not found")
        return product

def _apply_sizes(product: Product, sizes: list[SizeStockIn]) -> None:
    """Update size rows in place; a size listed twice keeps its last stock value."""
    wanted = {entry.size.value: entry.stock for entry in sizes}
    for row in list(product.sizes):
        if row.size not in wanted:
            product.sizes.remove(row)
    for size, stock in wanted.items():
        row = product.size_stock(size)
        if row is None:
            row = SizeStock(size=size)
            product.sizes.append(row)
        row.stock = stock
        row.in_stock = stock > 0

class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.catalog = CatalogLookup(db)

    def get_public(self, product_id: str) -> Product:
        product = self.catalog.get(product_id)
        if not product.is_active or product.status != ProductStatus.PUBLISHED.value:
            raise ProductNotFound(f"Product {product_id} not found")
        return product

    def create(self, data: ProductCreate) -> Product:
        values = data.model_dump(exclude={"sizes"}, mode="json")
        product = Product(**values)
        _apply_sizes(product, data.sizes)
        product.recalculate_discount()
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product created: {product.title}", extra={'extra_fields': {'product_id': product.id}})
        return product

    def update(self, product_id: str, data: ProductUpdate) -> Product:
        product = self.catalog.get(product_id)
        changes = data.model_dump(exclude_unset=True, exclude={"sizes"}, mode="json")
        for field, value in changes.items():
            setattr(product, field, value)
        if data.sizes is not None:
            _apply_sizes(product, data.sizes)
        product.recalculate_discount()
        self.db.commit()
        self.db.refresh(product)
        return product

    def archive(self, product_id: str) -> Product:
        """Soft delete: the row stays so order snapshots keep resolving."""
        product = self.catalog.get(product_id)
        product.is_active = False
        product.status = ProductStatus.ARCHIVED.value
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product archived: {product.title}", extra={'extra_fields': {'product_id': product.id}})
        return product
