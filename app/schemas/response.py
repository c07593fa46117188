from pydantic import BaseModel, Field
from typing import Any, Optional
import uuid


def new_request_id() -> str:
    """Generates a unique request ID for tracing."""
    return uuid.uuid4().hex

class SuccessResponse(BaseModel):
    """Envelope for every successful response: success flag, request_id and data."""
    success: Optional[bool] = Field(default=True)
    request_id: str = Field(default_factory=new_request_id)
    data: Optional[Any] = None

class ErrorDetail(BaseModel):
    code: str
    message: Any
    details: Optional[Any] = None
    shortage: Optional[dict] = None  # only on insufficient_stock

class ErrorResponse(BaseModel):
    """Envelope for every error response."""
    success: bool = False
    error: ErrorDetail
    request_id: str = Field(default_factory=new_request_id)

    def body(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
