import pytest
import pytest_asyncio
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock
from tortoise import Tortoise

from app.core.db import MODELS_MODULES
from app.models.employee import Employee
from app.models.inventory import InventoryItem
from app.models.menu import MenuCategory, MenuIngredient, MenuItem


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database per test."""
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": MODELS_MODULES})
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def catalog(db):
    """
    Small menu:
      Orange Chicken (entree) = 2 chicken + 1 sauce
      Fried Rice (side)       = 2 rice
      Egg Roll (extra)        = 1 chicken + 1 wrapper
      Water (drink)           = no recipe
      Seasonal Special        = inactive
    """
    chicken = await InventoryItem.create(name="Chicken", stock_level=10, unit_cost=Decimal("1.25"))
    sauce = await InventoryItem.create(name="Orange Sauce", stock_level=5, unit_cost=Decimal("0.40"))
    rice = await InventoryItem.create(name="Rice", stock_level=20, unit_cost=Decimal("0.15"))
    wrapper = await InventoryItem.create(name="Wrapper", stock_level=3, unit_cost=Decimal("0.08"))

    orange_chicken = await MenuItem.create(name="Orange Chicken", price=Decimal("8.99"), category=MenuCategory.ENTREE)
    fried_rice = await MenuItem.create(name="Fried Rice", price=Decimal("3.49"), category=MenuCategory.SIDE)
    egg_roll = await MenuItem.create(name="Egg Roll", price=Decimal("1.50"), category=MenuCategory.EXTRA)
    water = await MenuItem.create(name="Water", price=Decimal("1.00"), category=MenuCategory.DRINK)
    special = await MenuItem.create(
        name="Seasonal Special", price=Decimal("9.99"), category=MenuCategory.ENTREE, is_active=False
    )

    await MenuIngredient.create(menu_item=orange_chicken, inventory_item=chicken, quantity_needed=2)
    await MenuIngredient.create(menu_item=orange_chicken, inventory_item=sauce, quantity_needed=1)
    await MenuIngredient.create(menu_item=fried_rice, inventory_item=rice, quantity_needed=2)
    await MenuIngredient.create(menu_item=egg_roll, inventory_item=chicken, quantity_needed=1)
    await MenuIngredient.create(menu_item=egg_roll, inventory_item=wrapper, quantity_needed=1)

    cashier = await Employee.create(first_name="Sam", last_name="Lee", username="slee", password_hash="x")

    return SimpleNamespace(
        chicken=chicken,
        sauce=sauce,
        rice=rice,
        wrapper=wrapper,
        orange_chicken=orange_chicken,
        fried_rice=fried_rice,
        egg_roll=egg_roll,
        water=water,
        special=special,
        cashier=cashier,
    )


class FakeQuery:
    """
    Stands in for a chained Tortoise query: every builder method returns the same
    object and awaiting it yields `result`.
    """
    def __init__(self, result):
        self.result = result

    def __getattr__(self, name):
        return lambda *args, **kwargs: self

    def __await__(self):
        async def _result():
            return self.result
        return _result().__await__()


class AsyncContextManagerMock:
    """Mocks 'async with in_transaction() as conn:'."""
    def __init__(self, conn=None):
        self.conn = conn or SimpleNamespace(capabilities=SimpleNamespace(dialect="sqlite"))

    async def __aenter__(self):
        return self.conn

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


def postgres_conn(**kwargs):
    """A connection that reports the postgres dialect and records raw queries."""
    return SimpleNamespace(capabilities=SimpleNamespace(dialect="postgres"), execute_query=AsyncMock(**kwargs))


@pytest.fixture
def fake_transaction():
    return AsyncContextManagerMock
