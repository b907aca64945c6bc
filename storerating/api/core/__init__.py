from .response import api_response, error_response, raiseExceptions
from .dependencies import (
    GetSession,
    DirectoryQueryParams,
    requireSignin,
    requireRole,
    requireStoreOwner,
    requireUser,
)


__all__ = [
    "GetSession",
    "DirectoryQueryParams",
    "requireSignin",
    "requireRole",
    "requireStoreOwner",
    "requireUser",
    "api_response",
    "error_response",
    "raiseExceptions",
]
