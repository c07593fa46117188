from enum import Enum
from tortoise import fields, models


class OrderStatus(str, Enum):
    WAITING = "waiting"    # Queued behind the order in the lane
    BUILDING = "building"  # The single order currently being prepared
    COMPLETE = "complete"  # Terminal, kept for reporting and the menu board


class Order(models.Model):
    id = fields.IntField(primary_key=True)
    # Null for customer self-service orders placed at the kiosk
    employee = fields.ForeignKeyField("models.Employee", related_name="orders", null=True)
    placed_at = fields.DatetimeField(auto_now_add=True)
    total = fields.DecimalField(max_digits=14, decimal_places=2, default=0)
    status = fields.CharEnumField(OrderStatus, max_length=16, default=OrderStatus.WAITING)

    class Meta:
        table = "orders"
        indexes = [
            ("status",),                 # Lane and board lookups
            ("placed_at",),              # Report date ranges
            ("status", "id"),            # Composite: FIFO within a status
        ]


class OrderLine(models.Model):
    id = fields.IntField(primary_key=True)
    order = fields.ForeignKeyField("models.Order", related_name="lines")
    menu_item = fields.ForeignKeyField("models.MenuItem", related_name="order_lines")
    quantity_ordered = fields.IntField()

    class Meta:
        table = "order_lines"
        unique_together = (("order", "menu_item"),)
        indexes = [
            ("order_id",),
            ("menu_item_id",),          # Menu item popularity
        ]
