from typing import Any, Optional, Dict
from fastapi.responses import JSONResponse


def _envelope(success: bool, message: str, **extra: Any) -> Dict[str, Any]:
    body = {"success": success, "message": message}
    body.update({key: value for key, value in extra.items() if value is not None})
    return body


def success_response(message: str = "Success", data: Any = None, status_code: int = 200) -> JSONResponse:
    """`{"success": true, "message", "data"?}`; data is omitted when None"""
    return JSONResponse(content=_envelope(True, message, data=data), status_code=status_code)


def error_response(message: str = "Error", status_code: int = 400) -> JSONResponse:
    return JSONResponse(content=_envelope(False, message), status_code=status_code)


def validation_error_response(
    message: str = "Validation error",
    errors: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    """422 body listing the failing fields, keyed by their location"""
    return JSONResponse(content=_envelope(False, message, errors=errors or None), status_code=422)
