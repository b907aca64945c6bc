from enum import Enum
from typing import Any, Mapping, Optional

from sqlalchemy import TypeDecorator, and_, asc, desc, func
from sqlalchemy.sql import sqltypes as SATypes
from sqlmodel.sql.expression import SelectOfScalar, Select

DEFAULT_SORT_FIELD = "name"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


def parse_sort_order(value: Optional[str]) -> SortOrder:
    # anything other than "desc" sorts ascending
    if value and value.strip().lower() == SortOrder.desc.value:
        return SortOrder.desc
    return SortOrder.asc


def _get_column_type(expr):
    return getattr(expr, "type", None)


def _is_string_type(t):
    # SQLModel str fields are AutoString, a TypeDecorator over String
    if isinstance(t, TypeDecorator):
        t = t.impl_instance
    # Enum is a String subclass, but lower() is not defined for native enums
    return isinstance(t, (SATypes.String, SATypes.Text)) and not isinstance(
        t, SATypes.Enum
    )


def apply_text_filters(
    statement: Select | SelectOfScalar,
    columns: Mapping[str, Any],
    values: Mapping[str, Optional[str]],
):
    """
    AND together a case-insensitive substring match for every provided value.

    `columns` is the closed set of filterable fields for the listing; keys in
    `values` that are not declared there, or whose value is empty, add nothing.
    The value is always bound as a parameter.
    """
    conditions = []
    for field, value in values.items():
        if value is None or value == "" or field not in columns:
            continue
        conditions.append(columns[field].ilike(f"%{value}%"))

    if conditions:
        statement = statement.where(and_(*conditions))
    return statement


def resolve_sort(
    sort_columns: Mapping[str, Any],
    sort_by: Optional[str],
    default: str = DEFAULT_SORT_FIELD,
):
    """Column for `sort_by` if allow-listed, else the default column."""
    if sort_by in sort_columns:
        return sort_columns[sort_by]
    return sort_columns[default]


def apply_sort(
    statement: Select | SelectOfScalar,
    sort_columns: Mapping[str, Any],
    sort_by: Optional[str],
    sort_order: Optional[str],
    default: str = DEFAULT_SORT_FIELD,
    tie_breaker=None,
):
    attr = resolve_sort(sort_columns, sort_by, default)

    # Case-insensitive sorting for strings
    if _is_string_type(_get_column_type(attr)):
        order_expr = func.lower(attr)
    else:
        order_expr = attr

    if parse_sort_order(sort_order) is SortOrder.desc:
        statement = statement.order_by(desc(order_expr))
    else:
        statement = statement.order_by(asc(order_expr))

    if tie_breaker is not None:
        statement = statement.order_by(tie_breaker)
    return statement
