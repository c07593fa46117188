from tortoise import fields, models


class Employee(models.Model):
    id = fields.IntField(primary_key=True)
    first_name = fields.CharField(max_length=128)
    last_name = fields.CharField(max_length=128, null=True)
    username = fields.CharField(max_length=255, unique=True)
    password_hash = fields.CharField(max_length=255, null=True)
    is_manager = fields.BooleanField(default=False)
    is_active = fields.BooleanField(default=True)
    # False for accounts created by external sign-in rather than by a manager
    is_employee = fields.BooleanField(default=True)

    class Meta:
        table = "employees"
