from fastapi import APIRouter

from storerating.api.core.dependencies import (
    DirectoryQueryParams,
    GetSession,
    requireRole,
    requireUser,
)
from storerating.api.core.response import api_response
from storerating.api.models import UserRoleEnum
from storerating.api.models.ratingModel import RatingSubmit, UserRatingRead
from storerating.api.models.storeModel import UserStoreListItem
from storerating.api.services import directory, rating_ledger

router = APIRouter(
    prefix="/stores",
    tags=["Stores"],
    dependencies=[requireRole(UserRoleEnum.user)],
)


# ✅ LIST STORES with the caller's own rating
@router.get("")
def list_stores(
    query_params: DirectoryQueryParams,
    user: requireUser,
    session: GetSession,
):
    stores = directory.list_stores_for_user(
        session,
        user_id=user.get("id"),
        filters=query_params.text_filters("name", "address"),
        sort_by=query_params.sortBy,
        sort_order=query_params.sortOrder,
    )
    data = [UserStoreListItem.model_validate(store) for store in stores]
    return api_response(200, "Stores found", {"stores": data}, len(data))


# ✅ SUBMIT OR UPDATE RATING
@router.post("/{store_id}/rate")
def rate_store(
    store_id: int,
    request: RatingSubmit,
    user: requireUser,
    session: GetSession,
):
    rating, created = rating_ledger.submit_rating(
        session, user.get("id"), store_id, request.rating
    )
    if created:
        return api_response(201, "Rating submitted successfully", {"rating": rating.rating})
    return api_response(200, "Rating updated successfully", {"rating": rating.rating})


# ✅ READ OWN RATING
@router.get("/{store_id}/rating")
def read_rating(store_id: int, user: requireUser, session: GetSession):
    value = rating_ledger.get_user_rating(session, user.get("id"), store_id)
    return api_response(200, "Rating found", UserRatingRead(rating=value))


# ✅ REMOVE OWN RATING
@router.delete("/{store_id}/rating")
def remove_rating(store_id: int, user: requireUser, session: GetSession):
    rating_ledger.remove_rating(session, user.get("id"), store_id)
    return api_response(200, "Rating removed successfully")
