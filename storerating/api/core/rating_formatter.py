# storerating/api/core/rating_formatter.py
"""
Utility for presenting rating averages with one decimal place.
Aggregates are computed and passed around at full precision; rounding happens
only here, on the way out of the API.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Union


def format_rating(value: Optional[Union[float, Decimal, int]]) -> float:
    """
    Round an average rating to one decimal place.

    Examples:
        format_rating(4) -> 4.0
        format_rating(3.666) -> 3.7
        format_rating(2.25) -> 2.3
        format_rating(None) -> 0.0
    """
    if value is None or value == 0:
        return 0.0

    if isinstance(value, (int, float)):
        decimal_value = Decimal(str(value))
    elif isinstance(value, Decimal):
        decimal_value = value
    else:
        return 0.0

    return float(decimal_value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


# Keys holding averages in encoded payloads (camelCase after aliasing)
RATING_FIELDS = {"averageRating", "average_rating"}


def format_rating_values(obj: Any) -> Any:
    """Recursively round every average-rating field in an encoded payload"""
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            if key in RATING_FIELDS and isinstance(value, (int, float, Decimal)):
                result[key] = format_rating(value)
            elif isinstance(value, (dict, list)):
                result[key] = format_rating_values(value)
            else:
                result[key] = value
        return result
    if isinstance(obj, list):
        return [format_rating_values(item) for item in obj]
    return obj
