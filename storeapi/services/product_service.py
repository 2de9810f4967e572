"""
Product service - lifecycle rules for the product resource.
"""

from storeapi.core.errors import BadRequest
from storeapi.db.base import next_timestamp, utcnow
from storeapi.db.repositories.product_repository import ProductRepository
from storeapi.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storeapi.services.base import ResourceService, store_errors
from storeapi.validation.normalizers import new_product_document, product_patch
from storeapi.validation.rules import validate_product_create, validate_product_update


class ProductService(ResourceService[ProductRepository, ProductResponse]):
    resource = "product"
    plural = "products"
    response_model = ProductResponse

    async def create(self, payload: ProductCreate) -> ProductResponse:
        # payload-only rules: an invalid product never reaches the store
        validate_product_create(payload)
        with store_errors("Error creating product"):
            document = await self.repo.add(new_product_document(payload, utcnow()))
            return self.to_response(document)

    async def update(self, raw_id: str, payload: ProductUpdate) -> ProductResponse:
        id = self.parse_id(raw_id)
        with store_errors("Error updating product"):
            existing = await self.require(id)
            validate_product_update(payload)
            changes = product_patch(payload).changes_from(existing)
            if not changes:
                raise BadRequest("No changes made to product")
            fields = changes.to_set_document(updatedAt=next_timestamp(existing.get("updatedAt")))
            result = await self.repo.set_fields(id, fields)
            if result.matched_count == 0:
                raise self.not_found()
            updated = await self.require(id)
            return self.to_response(updated)
