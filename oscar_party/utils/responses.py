"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from oscar_party.core.exceptions import PartyValidationError
from oscar_party.schemas.common import StandardResponse, ErrorResponse

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=jsonable_encoder(data, by_alias=False)
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def not_found_error(resource: str = "Resource"):
    """Create not found error"""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{resource} not found"
    )

async def party_validation_handler(request: Request, exc: PartyValidationError) -> JSONResponse:
    """Turn a rejected submission into a 422 error envelope"""
    return error_response(
        message=exc.message,
        error_code="validation_error",
        details={"field": exc.field} if exc.field else None,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
    )
