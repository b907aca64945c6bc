from .directory_query import (
    SortOrder,
    apply_sort,
    apply_text_filters,
    parse_sort_order,
    resolve_sort,
)

__all__ = [
    "SortOrder",
    "apply_sort",
    "apply_text_filters",
    "parse_sort_order",
    "resolve_sort",
]
