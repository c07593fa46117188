import logging
from decimal import Decimal
from typing import List, Optional

from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError, ServiceValidationError
from app.models.inventory import InventoryItem

log = logging.getLogger("inventory_service")


async def list_inventory() -> List[InventoryItem]:
    return await InventoryItem.all().order_by("id")


async def add_inventory_item(name: str, stock_level: int, unit_cost: Decimal) -> InventoryItem:
    if stock_level < 0:
        raise ServiceValidationError("Stock level cannot be negative.")
    item = await InventoryItem.create(name=name, stock_level=stock_level, unit_cost=unit_cost)
    log.info(f"Inventory item {item.id} '{item.name}' added with stock {item.stock_level}.")
    return item


async def update_inventory_item(
    item_id: int,
    name: Optional[str] = None,
    stock_level: Optional[int] = None,
    unit_cost: Optional[Decimal] = None,
) -> InventoryItem:
    """Partial update; only the fields that are given change."""
    if stock_level is not None and stock_level < 0:
        raise ServiceValidationError("Stock level cannot be negative.")

    async with in_transaction() as conn:
        item = await InventoryItem.filter(id=item_id).select_for_update().using_db(conn).first()
        if item is None:
            raise NotFoundError(f"Inventory item {item_id} not found.")

        changed = []
        if name is not None:
            item.name = name
            changed.append("name")
        if stock_level is not None:
            item.stock_level = stock_level
            changed.append("stock_level")
        if unit_cost is not None:
            item.unit_cost = unit_cost
            changed.append("unit_cost")
        if changed:
            await item.save(update_fields=changed, using_db=conn)

    log.info(f"Inventory item {item_id} updated: {', '.join(changed) or 'no changes'}.")
    return item
