"""Filtered, sorted listings of users and stores, joined with rating aggregates."""
from typing import Optional

from sqlalchemy import String, cast
from sqlalchemy.orm import aliased
from sqlmodel import Session, func, select

from storerating.api.core.operation import apply_sort, apply_text_filters
from storerating.api.models import Rating, Store, User, UserRoleEnum


def _average_rating():
    return func.coalesce(func.avg(Rating.rating), 0).label("average_rating")


def _total_ratings():
    return func.count(Rating.id).label("total_ratings")


# ===================
# USERS (admin) ======================================
# ===================
USER_FILTER_COLUMNS = {
    "name": User.name,
    "email": User.email,
    "address": User.address,
}
USER_SORT_COLUMNS = {
    "name": User.name,
    "email": User.email,
    "address": User.address,
    # native enums sort in declaration order on PostgreSQL; compare the text
    "role": cast(User.role, String),
    "created_at": User.created_at,
}


def list_users(
    session: Session,
    filters: dict,
    role: Optional[UserRoleEnum] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> list[User]:
    statement = select(User)
    statement = apply_text_filters(statement, USER_FILTER_COLUMNS, filters)
    if role is not None:
        statement = statement.where(User.role == role)
    statement = apply_sort(
        statement, USER_SORT_COLUMNS, sort_by, sort_order, tie_breaker=User.id
    )
    return list(session.exec(statement).all())


# ===================
# STORES (admin) =====================================
# ===================
def list_stores_for_admin(
    session: Session,
    filters: dict,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> list[dict]:
    average_rating = _average_rating()
    total_ratings = _total_ratings()

    statement = (
        select(Store, User.name, User.email, average_rating, total_ratings)
        .select_from(Store)
        .join(User, Store.owner_id == User.id, isouter=True)
        .join(Rating, Rating.store_id == Store.id, isouter=True)
        .group_by(Store.id, User.id, User.name, User.email)
    )
    statement = apply_text_filters(
        statement,
        {"name": Store.name, "email": Store.email, "address": Store.address},
        filters,
    )
    statement = apply_sort(
        statement,
        {
            "name": Store.name,
            "email": Store.email,
            "address": Store.address,
            "average_rating": average_rating,
            "total_ratings": total_ratings,
            "created_at": Store.created_at,
        },
        sort_by,
        sort_order,
        tie_breaker=Store.id,
    )

    stores = []
    for store, owner_name, owner_email, average, count in session.exec(statement).all():
        stores.append(
            {
                "id": store.id,
                "name": store.name,
                "email": store.email,
                "address": store.address,
                "owner_id": store.owner_id,
                "created_at": store.created_at,
                "owner_name": owner_name,
                "owner_email": owner_email,
                "average_rating": float(average or 0),
                "total_ratings": int(count or 0),
            }
        )
    return stores


# ===================
# STORES (user) ======================================
# ===================
def list_stores_for_user(
    session: Session,
    user_id: int,
    filters: dict,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> list[dict]:
    average_rating = _average_rating()
    total_ratings = _total_ratings()
    own = aliased(Rating)

    statement = (
        select(Store, average_rating, total_ratings, own.rating)
        .select_from(Store)
        .join(Rating, Rating.store_id == Store.id, isouter=True)
        .join(
            own,
            (own.store_id == Store.id) & (own.user_id == user_id),
            isouter=True,
        )
        .group_by(Store.id, own.id, own.rating)
    )
    statement = apply_text_filters(
        statement,
        {"name": Store.name, "address": Store.address},
        filters,
    )
    statement = apply_sort(
        statement,
        {
            "name": Store.name,
            "address": Store.address,
            "average_rating": average_rating,
            "total_ratings": total_ratings,
            "created_at": Store.created_at,
        },
        sort_by,
        sort_order,
        tie_breaker=Store.id,
    )

    stores = []
    for store, average, count, user_rating in session.exec(statement).all():
        stores.append(
            {
                "id": store.id,
                "name": store.name,
                "address": store.address,
                "created_at": store.created_at,
                "average_rating": float(average or 0),
                "total_ratings": int(count or 0),
                "user_rating": user_rating,
            }
        )
    return stores


def owned_store(session: Session, owner_id: int) -> Optional[Store]:
    return session.exec(
        select(Store).where(Store.owner_id == owner_id).order_by(Store.id)
    ).first()


def owner_aggregate(session: Session, owner_id: int) -> tuple[float, int]:
    """Average and count over every store the owner holds; (0.0, 0) if none."""
    average, count = session.exec(
        select(func.avg(Rating.rating), func.count(Rating.id))
        .select_from(Rating)
        .join(Store, Rating.store_id == Store.id)
        .where(Store.owner_id == owner_id)
    ).one()
    return (float(average) if average is not None else 0.0, int(count or 0))


def store_ratings(session: Session, store_id: int) -> list[dict]:
    rows = session.exec(
        select(User, Rating)
        .join(Rating, Rating.user_id == User.id)
        .where(Rating.store_id == store_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
    ).all()
    return [
        {
            "user_id": user.id,
            "user_name": user.name,
            "user_email": user.email,
            "user_address": user.address,
            "rating": rating.rating,
            "rated_at": rating.created_at,
        }
        for user, rating in rows
    ]
