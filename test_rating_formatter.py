from decimal import Decimal

import pytest

from storerating.api.core.rating_formatter import format_rating, format_rating_values


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, 0.0),
        (0, 0.0),
        (4, 4.0),
        (13 / 3, 4.3),
        (3.666, 3.7),
        (2.25, 2.3),
        (2.35, 2.4),
        (Decimal("4.45"), 4.5),
        ("4.5", 0.0),
    ],
)
def test_format_rating(value, expected):
    assert format_rating(value) == expected


def test_format_rating_values_rounds_nested_averages_only():
    payload = {
        "store": {"averageRating": 4.3333, "totalRatings": 3, "rating": 4.25},
        "stores": [{"averageRating": 2.05}, {"average_rating": 1.66}],
        "averageRating": None,
    }

    assert format_rating_values(payload) == {
        "store": {"averageRating": 4.3, "totalRatings": 3, "rating": 4.25},
        "stores": [{"averageRating": 2.1}, {"average_rating": 1.7}],
        "averageRating": None,
    }


def test_format_rating_values_passes_scalars_through():
    assert format_rating_values(None) is None
    assert format_rating_values("x") == "x"
