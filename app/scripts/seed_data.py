# scripts/seed_data.py
import asyncio
from decimal import Decimal
from app.core.db import init_db, close_db
from app.models.inventory import InventoryItem
from app.models.menu import MenuCategory, MenuIngredient, MenuItem

INVENTORY = [
    # name, stock level, unit cost
    ("Chicken Breast", 200, "1.25"),
    ("Orange Sauce", 150, "0.40"),
    ("White Rice", 300, "0.15"),
    ("Chow Mein Noodles", 250, "0.30"),
    ("Cabbage", 120, "0.10"),
    ("Fountain Cup", 500, "0.05"),
    ("Egg Roll Wrapper", 180, "0.08"),
]

MENU = [
    # name, price, category, recipe {inventory name: quantity}
    ("Orange Chicken", "8.99", MenuCategory.ENTREE, {"Chicken Breast": 2, "Orange Sauce": 1}),
    ("Fried Rice", "3.49", MenuCategory.SIDE, {"White Rice": 2}),
    ("Chow Mein", "3.49", MenuCategory.SIDE, {"Chow Mein Noodles": 2, "Cabbage": 1}),
    ("Fountain Drink", "1.99", MenuCategory.DRINK, {"Fountain Cup": 1}),
    ("Egg Roll", "1.49", MenuCategory.EXTRA, {"Egg Roll Wrapper": 1, "Cabbage": 1}),
]

async def seed():
    inventory = {}
    for name, stock, cost in INVENTORY:
        item, _ = await InventoryItem.get_or_create(
            name=name, defaults={"stock_level": stock, "unit_cost": Decimal(cost)}
        )
        # If existing, reset quantities (idempotent)
        item.stock_level = stock
        await item.save()
        inventory[name] = item
    print("Inventory seeded:", len(inventory))

    for name, price, category, recipe in MENU:
        menu_item, created = await MenuItem.get_or_create(
            name=name, defaults={"price": Decimal(price), "category": category, "is_active": True}
        )
        if created:
            for inv_name, qty in recipe.items():
                await MenuIngredient.create(menu_item=menu_item, inventory_item=inventory[inv_name], quantity_needed=qty)
        print("Menu item:", menu_item.id, menu_item.name)

async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
