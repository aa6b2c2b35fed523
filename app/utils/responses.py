"""
Standardized response utilities
"""

from typing import Any, Dict, Iterable, Optional
from fastapi.responses import JSONResponse

from app.schemas.common import StandardResponse, ErrorResponse

def success_response(
    message: str,
    status_code: int = 200,
    **data: Any
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(message=message, **data)
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=status_code
    )

def error_response(
    message: str,
    status_code: int = 400,
    headers: Optional[Dict[str, str]] = None,
    **details: Any
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(message=message, **details)
    return JSONResponse(
        content=response.model_dump(mode="json", exclude_none=True),
        status_code=status_code,
        headers=headers
    )

def invalid_request(required: Iterable[str]) -> JSONResponse:
    """Create the 400 response for missing required fields"""
    fields = list(required)
    if len(fields) > 2:
        listed = ", ".join(fields[:-1]) + f", and {fields[-1]}"
    else:
        listed = " and ".join(fields)
    return error_response(
        message="Invalid Request",
        details=f"{listed} {'are' if len(fields) > 1 else 'is'} required.",
        status_code=400
    )

def not_found(resource: str, **identifiers: Any) -> JSONResponse:
    """Create not found response"""
    return error_response(
        message=f"{resource} Not Found",
        status_code=404,
        **identifiers
    )

def method_not_allowed(allowed: Iterable[str]) -> JSONResponse:
    """Create method not allowed response with the Allow header set"""
    allowed_methods = sorted(allowed)
    return error_response(
        message="Method Not Allowed",
        status_code=405,
        headers={"Allow": ", ".join(allowed_methods)},
        allowedMethods=allowed_methods
    )

def server_error(exc: Exception) -> JSONResponse:
    """Create internal server error response exposing the underlying message"""
    return error_response(
        message="Internal Server Error",
        error=str(exc),
        status_code=500
    )
