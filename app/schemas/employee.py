from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.services.employee_service import MAX_PASSWORD_BYTES


def _check_password_length(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes.")
    return v


class EmployeeResponse(BaseModel):
    """Employee record as shown to managers; the password hash never leaves the service."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: Optional[str] = None
    username: str
    is_manager: bool
    is_active: bool

class EmployeeRequest(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    is_manager: bool = False
    is_active: bool = True

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _check_password_length(v)

class EmployeeUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    is_manager: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _check_password_length(v)
