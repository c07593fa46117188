import logging
from typing import List, Optional

import bcrypt
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError, ServiceValidationError
from app.models.employee import Employee

log = logging.getLogger("employee_service")

UPDATABLE_FIELDS = ("first_name", "last_name", "username", "password", "is_manager", "is_active")


# bcrypt input limit
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ServiceValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes.")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


async def list_employees() -> List[Employee]:
    """Staff accounts only; customer accounts from external sign-in are left out."""
    return await Employee.filter(is_employee=True).order_by("id")


async def add_employee(
    first_name: str,
    last_name: str,
    username: str,
    password: str,
    is_manager: bool = False,
    is_active: bool = True,
) -> Employee:
    if await Employee.filter(username=username).exists():
        raise ServiceValidationError(f"Username '{username}' is already taken.")
    try:
        employee = await Employee.create(
            first_name=first_name,
            last_name=last_name,
            username=username,
            password_hash=hash_password(password),
            is_manager=is_manager,
            is_active=is_active,
            is_employee=True,
        )
    except IntegrityError:
        raise ServiceValidationError(f"Username '{username}' is already taken.")
    log.info(f"Employee {employee.id} '{employee.username}' added.")
    return employee


async def update_employee(employee_id: int, **changes) -> Employee:
    """Partial update; a new password is hashed before it is stored."""
    unknown_fields = set(changes) - set(UPDATABLE_FIELDS)
    if unknown_fields:
        raise ServiceValidationError(f"Cannot update field(s): {', '.join(sorted(unknown_fields))}.")
    changes = {k: v for k, v in changes.items() if v is not None}

    password: Optional[str] = changes.pop("password", None)
    if password is not None:
        changes["password_hash"] = hash_password(password)

    try:
        async with in_transaction() as conn:
            employee = await Employee.filter(id=employee_id).select_for_update().using_db(conn).first()
            if employee is None:
                raise NotFoundError(f"Employee {employee_id} not found.")
            if changes:
                employee.update_from_dict(changes)
                await employee.save(update_fields=list(changes), using_db=conn)
    except IntegrityError:
        raise ServiceValidationError(f"Username '{changes.get('username')}' is already taken.")

    log.info(f"Employee {employee_id} updated.")
    return employee
