from fastapi import Query
from typing import Optional


class directory_query_params:
    def __init__(
        self,
        name: Optional[str] = Query(None, description="Case-insensitive substring"),
        email: Optional[str] = Query(None, description="Case-insensitive substring"),
        address: Optional[str] = Query(
            None, description="Case-insensitive substring"
        ),
        sortBy: str = Query(
            "name", description="Unknown fields fall back to 'name'"
        ),
        sortOrder: str = Query("asc", description="asc | desc"),
    ):
        self.name = name
        self.email = email
        self.address = address
        self.sortBy = sortBy
        self.sortOrder = sortOrder

    def text_filters(self, *fields: str) -> dict:
        return {field: getattr(self, field) for field in fields}
