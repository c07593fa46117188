import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from app.core.errors import InsufficientStockError
from app.schemas.response import ErrorDetail, ErrorResponse

log = logging.getLogger("uvicorn.error")


# ----------- Exception Handlers (called by FastAPI) -----------

def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g., 404, 400)."""
    body = ErrorResponse(error=ErrorDetail(code="http_error", message=exc.detail)).body()
    return JSONResponse(status_code=exc.status_code, content=body)


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handles Pydantic validation errors (422 Unprocessable Entity)."""
    body = ErrorResponse(
        error=ErrorDetail(
            code="validation_error",
            message="Invalid input data",
            details=jsonable_encoder(exc.errors()),
        )
    ).body()
    return JSONResponse(status_code=422, content=body)


def insufficient_stock_handler(request: Request, exc: InsufficientStockError):
    """Low stock rejections carry the shortage so staff can see what ran out."""
    body = ErrorResponse(
        error=ErrorDetail(
            code="insufficient_stock",
            message=str(exc),
            shortage=exc.shortage.as_dict(),
        )
    ).body()
    return JSONResponse(status_code=400, content=body)


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    log.error(f"Unhandled exception on path: {request.url.path}", exc_info=exc)

    body = ErrorResponse(error=ErrorDetail(code="server_error", message="Internal Server Error")).body()
    return JSONResponse(status_code=500, content=body)


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InsufficientStockError, insufficient_stock_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
