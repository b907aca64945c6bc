from storerating.api.models.baseModel import CamelSchema


class DashboardStats(CamelSchema):
    total_users: int
    total_stores: int
    total_ratings: int
