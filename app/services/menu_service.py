import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError, ServiceValidationError
from app.models.inventory import InventoryItem
from app.models.menu import MenuCategory, MenuIngredient, MenuItem

log = logging.getLogger("menu_service")

UPDATABLE_FIELDS = ("name", "price", "category", "description", "is_active")


def normalize_category(value: str) -> MenuCategory:
    """Categories are matched case-insensitively and stored lowercase."""
    if isinstance(value, MenuCategory):
        return value
    try:
        return MenuCategory(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in MenuCategory)
        raise ServiceValidationError(f"Invalid category '{value}'. Expected one of: {allowed}.")


def clean_recipe(ingredients: List[Dict]) -> Dict[int, int]:
    """{inventory_id: quantity}; zero quantities are not stored."""
    recipe: Dict[int, int] = {}
    for ing in ingredients:
        inv_id = int(ing["inventory_id"])
        qty = int(ing["quantity"])
        if qty < 0:
            raise ServiceValidationError(f"Quantity for inventory item {inv_id} cannot be negative.")
        if qty == 0:
            continue
        recipe[inv_id] = recipe.get(inv_id, 0) + qty
    return recipe


async def _write_recipe(menu_item: MenuItem, recipe: Dict[int, int], conn: Any) -> None:
    if not recipe:
        return
    known = set(await InventoryItem.filter(id__in=list(recipe)).using_db(conn).values_list("id", flat=True))
    unknown = [inv_id for inv_id in recipe if inv_id not in known]
    if unknown:
        raise ServiceValidationError(
            f"Inventory item(s) {', '.join(str(i) for i in unknown)} not found."
        )
    await MenuIngredient.bulk_create(
        [
            MenuIngredient(menu_item=menu_item, inventory_item_id=inv_id, quantity_needed=qty)
            for inv_id, qty in recipe.items()
        ],
        using_db=conn,
    )


async def list_active_items() -> List[MenuItem]:
    return await MenuItem.filter(is_active=True).order_by("id")


async def list_all_items() -> List[MenuItem]:
    """Every menu item, active or not, with its recipe and the inventory it draws on."""
    return await MenuItem.all().order_by("id").prefetch_related("ingredients__inventory_item")


async def add_menu_item(
    name: str,
    price: Decimal,
    category: str,
    description: Optional[str] = None,
    is_active: bool = True,
    ingredients: Optional[List[Dict]] = None,
) -> MenuItem:
    """Creates the menu item and its recipe in one transaction."""
    category = normalize_category(category)
    recipe = clean_recipe(ingredients or [])

    async with in_transaction() as conn:
        item = await MenuItem.create(
            name=name,
            price=price,
            category=category,
            description=description,
            is_active=is_active,
            using_db=conn,
        )
        await _write_recipe(item, recipe, conn)

    log.info(f"Menu item {item.id} '{item.name}' added with {len(recipe)} ingredient(s).")
    return item


async def update_menu_item(item_id: int, ingredients: Optional[List[Dict]] = None, **changes) -> MenuItem:
    """
    Partial update of the menu item fields in `changes`. A non-empty ingredient list
    replaces the whole recipe (delete all, then insert); an empty or missing one
    leaves the recipe alone.
    """
    unknown_fields = set(changes) - set(UPDATABLE_FIELDS)
    if unknown_fields:
        raise ServiceValidationError(f"Cannot update field(s): {', '.join(sorted(unknown_fields))}.")
    if changes.get("category") is not None:
        changes["category"] = normalize_category(changes["category"])
    # name, price, category and active flag are never cleared
    changes = {k: v for k, v in changes.items() if v is not None or k == "description"}

    async with in_transaction() as conn:
        item = await MenuItem.filter(id=item_id).select_for_update().using_db(conn).first()
        if item is None:
            raise NotFoundError(f"Menu item {item_id} not found.")

        if changes:
            item.update_from_dict(changes)
            await item.save(update_fields=list(changes), using_db=conn)

        if ingredients:
            recipe = clean_recipe(ingredients)
            await MenuIngredient.filter(menu_item_id=item.id).using_db(conn).delete()
            await _write_recipe(item, recipe, conn)

    log.info(f"Menu item {item_id} updated.")
    return item
