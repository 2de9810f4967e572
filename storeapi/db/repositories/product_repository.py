"""
Product repository - product data access.
"""

from storeapi.db.base import PRODUCTS
from storeapi.db.repositories.base_repository import BaseRepository


class ProductRepository(BaseRepository):
    """Products need nothing beyond the generic CRUD calls."""

    collection_name = PRODUCTS
