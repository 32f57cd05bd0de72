"""Response envelope shared by every endpoint."""
from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    """Wrap data in the success envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "data": jsonable_encoder(data),
            "message": message,
            "success": status_code < 400,
        },
    )


def error_response(status_code: int, message: str, errors: Optional[List[Any]] = None) -> JSONResponse:
    """Build the failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "data": None,
            "message": message,
            "success": False,
            "errors": jsonable_encoder(errors or []),
        },
    )
