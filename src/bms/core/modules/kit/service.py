from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from bms.core.core import Service
from bms.core.modules.counter.formatting import kit_sku
from bms.core.modules.counter.models import DocumentType
from bms.core.modules.kit.models import Kit, KitData
from bms.errors import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class KitService(Service):
    """Product kits."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("kits")

    async def on_start(self) -> None:
        await self._collection.create_index([("kit_id", 1)], unique=True)
        await self._collection.create_index([("sku", 1)], unique=True)
        await self._collection.create_index([("name", 1)], unique=True)

    async def get_kit(self, kit_id: int) -> Kit:
        doc = await self._collection.find_one({"kit_id": kit_id})
        if not doc:
            raise NotFoundError(f"Kit not found: {kit_id}")
        return Kit.model_validate(doc)

    async def create_kit(self, data: KitData) -> Kit:
        """Check components and name, then allocate a kit id and persist.

        When no price is given, the kit is priced at the sum of its components.
        """
        product_ids = [component.product_id for component in data.products]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError("Each product may appear only once in a kit")
        products = await self.core.services.product.get_products(product_ids)
        missing = [pid for pid in product_ids if pid not in products]
        if missing:
            raise NotFoundError(f"Products not found: {', '.join(map(str, missing))}")
        if await self._collection.find_one({"name": data.name}):
            raise ValidationError(f"Kit '{data.name}' already exists")

        price = data.price
        if not price:
            price = sum(products[c.product_id].price * c.quantity for c in data.products)

        kit_id = await self.core.services.counter.allocate(DocumentType.KIT)
        kit = Kit(kit_id=kit_id, sku=kit_sku(kit_id, data.name), **data.model_dump(exclude={"price"}), price=price)
        try:
            await self._collection.insert_one(kit.to_mongo())
        except DuplicateKeyError as e:
            # Name pre-check can lose a race, and a generated SKU can clash with a legacy one
            raise ConflictError(f"Kit name, SKU or id conflict for '{data.name}'. Please try again.") from e
        logger.info("kit_created", kit_id=kit_id, sku=kit.sku, components=len(data.products))
        return kit
