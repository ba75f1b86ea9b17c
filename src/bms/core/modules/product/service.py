from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from bms.core.core import Service
from bms.core.modules.counter.formatting import product_sku
from bms.core.modules.counter.models import DocumentType
from bms.core.modules.product.models import Product, ProductData
from bms.errors import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)

LEGACY_PROJECTION = {"_id": 1, "name": 1, "category": 1, "brand": 1, "sku": 1}


class ProductService(Service):
    """Catalog products with permanent sequential ids."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("products")

    async def on_start(self) -> None:
        # Partial so legacy products without an id can coexist until backfilled
        await self._collection.create_index(
            [("product_id", 1)], unique=True, partialFilterExpression={"product_id": {"$type": "number"}}
        )
        await self._collection.create_index([("sku", 1)], unique=True, partialFilterExpression={"sku": {"$type": "string"}})

    async def get_product(self, product_id: int) -> Product:
        doc = await self._collection.find_one({"product_id": product_id})
        if not doc:
            raise NotFoundError(f"Product not found: {product_id}")
        return Product.model_validate(doc)

    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Fetch products by id, keyed by product_id. Missing ids are simply absent."""
        products = await Product.list_cursor(self._collection.find({"product_id": {"$in": product_ids}}))
        return {product.product_id: product for product in products if product.product_id is not None}

    async def create_product(self, data: ProductData) -> Product:
        product_id = await self.core.services.counter.allocate(DocumentType.PRODUCT)
        product = Product(product_id=product_id, sku=product_sku(product_id, data.category, data.brand), **data.model_dump())
        try:
            await self._collection.insert_one(product.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("SKU or product id conflict. Please try again.") from e
        logger.info("product_created", product_id=product_id, sku=product.sku)
        return product

    async def backfill_product_ids(self) -> int:
        """Assign ids and SKUs to legacy products stored without a product_id.

        Returns the number of products updated.
        """
        # Legacy rows come from the previous schema (ObjectId _id, camelCase fields), so they stay raw documents
        cursor = self._collection.find({"product_id": None}, LEGACY_PROJECTION).sort("_id", 1)
        updated = 0
        async for doc in cursor:
            product_id = await self.core.services.counter.allocate(DocumentType.PRODUCT)
            sku = doc.get("sku") or product_sku(product_id, doc.get("category"), doc.get("brand"))
            await self._collection.update_one({"_id": doc["_id"]}, {"$set": {"product_id": product_id, "sku": sku}})
            logger.info("product_id_backfilled", product=str(doc["_id"]), name=doc.get("name"), product_id=product_id)
            updated += 1
        return updated
