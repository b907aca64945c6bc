from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from storerating.api.core.dependencies.query_params import directory_query_params
from storerating.lib.db_con import get_session
from storerating.api.core.security import require_role, require_signin
from storerating.api.models import UserRoleEnum


GetSession = Annotated[Session, Depends(get_session)]

requireSignin = Annotated[dict, Depends(require_signin)]
DirectoryQueryParams = Annotated[directory_query_params, Depends(directory_query_params)]

# one gate per role; a router and its handlers share the same callable so
# FastAPI resolves the gate once per request
ROLE_GATES = {role: require_role(role) for role in UserRoleEnum}


def requireRole(role: UserRoleEnum):
    return Depends(ROLE_GATES[UserRoleEnum(role)])


requireStoreOwner = Annotated[dict, requireRole(UserRoleEnum.store_owner)]
requireUser = Annotated[dict, requireRole(UserRoleEnum.user)]
