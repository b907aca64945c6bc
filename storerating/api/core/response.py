from typing import Any, Optional, Union

from fastapi import HTTPException
from fastapi.encoders import (
    jsonable_encoder,
)
from fastapi.responses import (
    JSONResponse,
)

from storerating.api.core.rating_formatter import format_rating_values


def _content(
    code: int,
    detail: str,
    data: Optional[Union[dict, list]] = None,
    total: Optional[int] = None,
) -> dict:
    # Convert data to JSON-able format, then round averages for presentation
    formatted_data = format_rating_values(jsonable_encoder(data))

    content = {
        "success": (1 if code < 300 else 0),
        "detail": detail,
        "data": formatted_data,
    }

    if total is not None:
        content["total"] = total
    return content


def api_response(
    code: int,
    detail: str,
    data: Optional[Union[dict, list]] = None,
    total: Optional[int] = None,
):
    # Raise error if code >= 400
    if code >= 400:
        raise HTTPException(
            status_code=code,
            detail=detail,
        )

    return JSONResponse(
        status_code=code,
        content=_content(code, detail, data, total),
    )


def error_response(
    code: int,
    detail: str,
    data: Optional[Union[dict, list]] = None,
) -> JSONResponse:
    """Build an error response without raising; exception handlers must return one."""
    return JSONResponse(
        status_code=code,
        content=_content(code, detail, data),
    )


def raiseExceptions(*conditions: tuple[Any, int | None, str | None, bool | None]):
    """
    Example usage:
        raiseExceptions(
            (store, 404, "Store not found"),
            (email_taken, 400, "Store with this email already exists", True),
        )
    """
    for cond in conditions:
        # Unpack with defaults
        condition = cond[0] if len(cond) > 0 else False  # Condition
        code = cond[1] if len(cond) > 1 else 400
        detail = cond[2] if len(cond) > 2 else "error"
        isCond = cond[3] if len(cond) > 3 else False

        if isCond and condition:  # Fail if condition is True
            return api_response(code, detail)
        elif not condition and not isCond:  # Fail if condition is False
            return api_response(code, detail)
    return None  # everything passed
