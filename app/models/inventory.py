from tortoise import fields, models


class InventoryItem(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    stock_level = fields.IntField(default=0)
    unit_cost = fields.DecimalField(max_digits=12, decimal_places=2, default=0)

    class Meta:
        table = "inventory"
        indexes = [
            ("name",),
        ]

    def __str__(self):
        return self.name
