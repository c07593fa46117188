from tortoise import fields, models


class DailyTotal(models.Model):
    """
    Running totals for the current business day. Bumped by every placed order
    and cleared when the closing (Z) report is read.
    """
    id = fields.IntField(primary_key=True)
    date = fields.DateField(unique=True)
    total_orders = fields.IntField(default=0)
    total_sales = fields.DecimalField(max_digits=14, decimal_places=2, default=0)

    class Meta:
        table = "daily_totals"
