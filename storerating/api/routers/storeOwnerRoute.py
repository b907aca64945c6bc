from fastapi import APIRouter

from storerating.api.core.dependencies import (
    GetSession,
    requireRole,
    requireStoreOwner,
)
from storerating.api.models import UserRoleEnum
from storerating.api.core.response import api_response, raiseExceptions
from storerating.api.models.ratingModel import (
    RatingDistribution,
    StoreRatingEntry,
    StoreStats,
)
from storerating.api.models.storeModel import OwnerStoreRead
from storerating.api.services import directory, rating_ledger

router = APIRouter(
    prefix="/store-owner",
    tags=["Store Owner"],
    dependencies=[requireRole(UserRoleEnum.store_owner)],
)


def _owned_store_or_404(session, user: dict):
    store = directory.owned_store(session, user.get("id"))
    raiseExceptions((store, 404, "No store found for this owner"))
    return store


# ✅ DASHBOARD: store aggregate + who rated it
@router.get("/dashboard")
def dashboard(user: requireStoreOwner, session: GetSession):
    store = _owned_store_or_404(session, user)
    aggregate = rating_ledger.aggregate_for_store(session, store.id)

    store_data = OwnerStoreRead(
        id=store.id,
        name=store.name,
        email=store.email,
        address=store.address,
        average_rating=aggregate.average,
        total_ratings=aggregate.count,
    )
    ratings = [
        StoreRatingEntry.model_validate(entry)
        for entry in directory.store_ratings(session, store.id)
    ]
    return api_response(200, "Store dashboard", {"store": store_data, "ratings": ratings})


# ✅ STATS: aggregate + per-star distribution
@router.get("/stats")
def stats(user: requireStoreOwner, session: GetSession):
    store = _owned_store_or_404(session, user)
    aggregate = rating_ledger.aggregate_for_store(session, store.id)
    distribution = rating_ledger.rating_distribution(session, store.id)

    data = StoreStats(
        store_id=store.id,
        store_name=store.name,
        average_rating=aggregate.average,
        total_ratings=aggregate.count,
        rating_distribution=RatingDistribution(
            five_star=distribution[5],
            four_star=distribution[4],
            three_star=distribution[3],
            two_star=distribution[2],
            one_star=distribution[1],
        ),
    )
    return api_response(200, "Store stats", data)
