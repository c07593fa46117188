from enum import Enum
from tortoise import fields, models


class MenuCategory(str, Enum):
    ENTREE = "entree"
    SIDE = "side"
    DRINK = "drink"
    EXTRA = "extra"


class MenuItem(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    price = fields.DecimalField(max_digits=12, decimal_places=2)
    category = fields.CharEnumField(MenuCategory, max_length=16)
    description = fields.TextField(null=True)
    is_active = fields.BooleanField(default=True)

    class Meta:
        table = "menu"
        indexes = [
            ("is_active",),      # Kiosk only lists active items
            ("category",),
        ]

    def __str__(self):
        return self.name


class MenuIngredient(models.Model):
    """One recipe line: how much of an inventory item a single unit of a menu item consumes."""
    id = fields.IntField(primary_key=True)
    menu_item = fields.ForeignKeyField("models.MenuItem", related_name="ingredients")
    inventory_item = fields.ForeignKeyField("models.InventoryItem", related_name="used_in")
    quantity_needed = fields.IntField()

    class Meta:
        table = "menu_ingredients"
        unique_together = (("menu_item", "inventory_item"),)
        indexes = [
            ("menu_item_id",),
            ("inventory_item_id",),
        ]
