from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.application.catalog import ProductService
from storefront.application.schemas import ApiResponse, ProductRead
from storefront.infrastructure.db import get_db

router = APIRouter(prefix="/api/products", tags=["products"])

@router.get("/{product_id}", response_model=ApiResponse[ProductRead])
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = ProductService(db).get_public(product_id)
    return ApiResponse(data=ProductRead.model_validate(product))
