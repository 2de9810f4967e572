"""
Product CRUD endpoints - reads are public, writes need a logged-in session.
"""

from fastapi import APIRouter, status

from storeapi.core.dependencies import CurrentAccount, Products
from storeapi.schemas.base import DeletedResponse, Envelope
from storeapi.schemas.product import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter()


@router.get("", response_model=Envelope[list[ProductResponse]])
async def list_products(products: Products):
    data = await products.list_all()
    return Envelope[list[ProductResponse]](count=len(data), data=data)


@router.get("/{product_id}", response_model=Envelope[ProductResponse])
async def get_product(products: Products, product_id: str):
    return Envelope[ProductResponse](data=await products.get(product_id))


@router.post("", response_model=Envelope[ProductResponse], status_code=status.HTTP_201_CREATED)
async def create_product(products: Products, data: ProductCreate, account: CurrentAccount):
    """Create product (authenticated). Missing description/category/inStock get defaults."""
    product = await products.create(data)
    return Envelope[ProductResponse](message="Product created successfully", data=product)


@router.put("/{product_id}", response_model=Envelope[ProductResponse])
async def update_product(products: Products, product_id: str, data: ProductUpdate, account: CurrentAccount):
    product = await products.update(product_id, data)
    return Envelope[ProductResponse](message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=Envelope[DeletedResponse])
async def delete_product(products: Products, product_id: str, account: CurrentAccount):
    deleted = await products.delete(product_id)
    return Envelope[DeletedResponse](message="Product deleted successfully", data=deleted)
