import logging
from typing import Optional

from fastapi import APIRouter, Query
from sqlmodel import func, select

from storerating.api.core.dependencies import (
    DirectoryQueryParams,
    GetSession,
    requireRole,
)
from storerating.api.core.response import api_response, raiseExceptions
from storerating.api.core.security import exist_user, hash_password
from storerating.api.models import Rating, Store, User, UserRoleEnum
from storerating.api.models.dashboardModel import DashboardStats
from storerating.api.models.storeModel import AdminStoreListItem, StoreCreate, StoreRead
from storerating.api.models.usersModel import UserCreate, UserRead
from storerating.api.services import directory

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[requireRole(UserRoleEnum.admin)],
)


# ✅ DASHBOARD COUNTS
@router.get("/dashboard-stats")
def dashboard_stats(session: GetSession):
    stats = DashboardStats(
        total_users=session.exec(select(func.count(User.id))).one(),
        total_stores=session.exec(select(func.count(Store.id))).one(),
        total_ratings=session.exec(select(func.count(Rating.id))).one(),
    )
    return api_response(200, "Dashboard stats", stats)


# ✅ LIST USERS
@router.get("/users")
def list_users(
    query_params: DirectoryQueryParams,
    session: GetSession,
    role: Optional[UserRoleEnum] = Query(None, description="Exact role filter"),
):
    users = directory.list_users(
        session,
        filters=query_params.text_filters("name", "email", "address"),
        role=role,
        sort_by=query_params.sortBy,
        sort_order=query_params.sortOrder,
    )
    data = [UserRead.model_validate(user) for user in users]
    return api_response(200, "Users found", {"users": data}, len(data))


# ✅ READ USER
@router.get("/users/{user_id}")
def read_user(user_id: int, session: GetSession):
    db_user = session.get(User, user_id)
    raiseExceptions((db_user, 404, "User not found"))

    user_data = UserRead.model_validate(db_user).model_dump(by_alias=True)
    if db_user.role == UserRoleEnum.store_owner:
        average, count = directory.owner_aggregate(session, db_user.id)
        user_data["averageRating"] = average
        user_data["totalRatings"] = count

    return api_response(200, "User found", {"user": user_data})


# ✅ CREATE USER
@router.post("/users")
def create_user(request: UserCreate, session: GetSession):
    raiseExceptions(
        (
            exist_user(session, request.email),
            400,
            "User with this email already exists",
            True,
        )
    )

    user_data = request.model_dump(exclude={"password"})
    user_data["password"] = hash_password(request.password)
    new_user = User(**user_data)
    session.add(new_user)
    session.commit()
    session.refresh(new_user)

    logger.info("User created by admin: id=%s role=%s", new_user.id, new_user.role.value)
    return api_response(201, "User created successfully", {"user": UserRead.model_validate(new_user)})


# ✅ LIST STORES
@router.get("/stores")
def list_stores(query_params: DirectoryQueryParams, session: GetSession):
    stores = directory.list_stores_for_admin(
        session,
        filters=query_params.text_filters("name", "email", "address"),
        sort_by=query_params.sortBy,
        sort_order=query_params.sortOrder,
    )
    data = [AdminStoreListItem.model_validate(store) for store in stores]
    return api_response(200, "Stores found", {"stores": data}, len(data))


# ✅ CREATE STORE
@router.post("/stores")
def create_store(request: StoreCreate, session: GetSession):
    existing_store = session.exec(select(Store).where(Store.email == request.email)).first()
    raiseExceptions((existing_store, 400, "Store with this email already exists", True))

    if request.owner_id is not None:
        owner = session.get(User, request.owner_id)
        raiseExceptions((owner, 400, "Owner not found"))
        raiseExceptions(
            (owner.role == UserRoleEnum.store_owner, 400, "Owner must be a store owner")
        )

    store = Store(**request.model_dump())
    session.add(store)
    session.commit()
    session.refresh(store)

    logger.info("Store created: id=%s owner=%s", store.id, store.owner_id)
    return api_response(201, "Store created successfully", {"store": StoreRead.model_validate(store)})
