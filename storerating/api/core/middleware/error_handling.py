import logging
import re

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError, OperationalError

from storerating.api.core.response import error_response

logger = logging.getLogger(__name__)


def register_exception_handlers(app):

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return error_response(
            400, "Validation error", data={"errors": jsonable_encoder(exc.errors())}
        )

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        msg = str(exc.orig) if exc.orig else str(exc)
        if "duplicate key value violates unique constraint" in msg:
            m = re.search(r"Key \((.*?)\)=\((.*?)\)", msg)
            if m:
                field, value = m.groups()
                msg = f"Duplicate entry: {field} = {value}"
            else:
                msg = "Duplicate key violation"
        elif "UNIQUE constraint failed" in msg:
            msg = "Duplicate key violation"
        else:
            msg = "Constraint violation"
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return error_response(409, msg)

    @app.exception_handler(OperationalError)
    async def operational_exception_handler(request: Request, exc: OperationalError):
        logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc)
        return error_response(503, "Database unavailable, try again later")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal Server Error")
