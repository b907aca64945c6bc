import pytest
from sqlalchemy import inspect

from conftest import auth_header
from storerating.api.core.operation import (
    SortOrder,
    apply_sort,
    parse_sort_order,
    resolve_sort,
)
from storerating.api.models import User, UserRoleEnum
from storerating.api.services import directory
from storerating.api.services.directory import USER_SORT_COLUMNS

INJECTION = "'; DROP TABLE users;--"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("desc", SortOrder.desc),
        ("DESC", SortOrder.desc),
        ("asc", SortOrder.asc),
        ("sideways", SortOrder.asc),
        (None, SortOrder.asc),
    ],
)
def test_parse_sort_order(value, expected):
    assert parse_sort_order(value) is expected


@pytest.mark.parametrize("sort_by", [INJECTION, "password", "", None, "name; --"])
def test_unknown_sort_field_resolves_to_name(sort_by):
    assert resolve_sort(USER_SORT_COLUMNS, sort_by) is User.name


def test_allow_listed_sort_field_is_used():
    assert resolve_sort(USER_SORT_COLUMNS, "email") is User.email


def test_injected_sort_field_is_never_rendered():
    from sqlmodel import select

    statement = apply_sort(select(User), USER_SORT_COLUMNS, INJECTION, "asc")
    compiled = str(statement)

    assert "DROP" not in compiled
    assert "lower(users.name)" in compiled


def test_injected_sort_matches_name_sort(session, make_user):
    make_user(name="Charlie Brown From The Comics")
    make_user(name="alice Liddell Through The Glass")
    make_user(name="Bob The Builder Of Many Houses")

    by_name = directory.list_users(session, {}, sort_by="name", sort_order="asc")
    injected = directory.list_users(session, {}, sort_by=INJECTION, sort_order="asc")

    assert [u.id for u in injected] == [u.id for u in by_name]
    # case-insensitive ordering
    assert [u.name.split()[0] for u in by_name] == ["alice", "Bob", "Charlie"]
    assert inspect(session.get_bind()).has_table("users")


def test_filters_are_conjunctive_and_case_insensitive(session, make_user):
    match = make_user(name="Margaret Hamilton Of Apollo", address="12 Orbit Road, Houston")
    make_user(name="Margaret Thatcher Of Downing", address="10 Downing Street, London")
    make_user(name="Grace Hopper Of The Navy Labs", address="9 Orbit Avenue, Arlington")

    users = directory.list_users(session, {"name": "MARGARET", "address": "orbit"})

    assert [u.id for u in users] == [match.id]


def test_empty_filters_impose_no_constraint(session, make_user):
    make_user()
    make_user()

    users = directory.list_users(session, {"name": "", "email": None, "address": None})

    assert len(users) == 2


def test_filter_values_are_bound_not_interpolated(session, make_user):
    make_user()

    assert directory.list_users(session, {"name": INJECTION}) == []
    assert inspect(session.get_bind()).has_table("users")


def test_role_filter(session, make_user):
    owner = make_user(role=UserRoleEnum.store_owner)
    make_user(role=UserRoleEnum.user)

    users = directory.list_users(session, {}, role=UserRoleEnum.store_owner)

    assert [u.id for u in users] == [owner.id]


def test_admin_store_listing_joins_owner_and_aggregate(
    session, make_user, make_store, add_rating, store_owner
):
    owned = make_store(name="Corner Shop", owner=store_owner)
    unowned = make_store(name="Bakery")
    add_rating(make_user(), owned, 5)
    add_rating(make_user(), owned, 2)

    stores = directory.list_stores_for_admin(
        session, {}, sort_by="average_rating", sort_order="desc"
    )

    assert [s["id"] for s in stores] == [owned.id, unowned.id]
    assert stores[0]["owner_name"] == store_owner.name
    assert stores[0]["owner_email"] == store_owner.email
    assert stores[0]["average_rating"] == 3.5
    assert stores[0]["total_ratings"] == 2
    assert stores[1]["owner_name"] is None
    assert stores[1]["average_rating"] == 0.0
    assert stores[1]["total_ratings"] == 0


def test_admin_store_listing_filters_by_email(session, make_store):
    make_store(email="contact@bakery.example.com")
    make_store(email="hello@florist.example.com")

    stores = directory.list_stores_for_admin(session, {"email": "FLORIST"})

    assert [s["email"] for s in stores] == ["hello@florist.example.com"]


def test_user_store_listing_carries_own_rating(
    session, normal_user, make_user, make_store, add_rating
):
    rated = make_store(name="Alpha")
    unrated = make_store(name="Beta")
    add_rating(normal_user, rated, 4)
    add_rating(make_user(), rated, 2)
    add_rating(make_user(), unrated, 5)

    stores = directory.list_stores_for_user(session, normal_user.id, {})

    by_id = {s["id"]: s for s in stores}
    assert by_id[rated.id]["user_rating"] == 4
    assert by_id[rated.id]["total_ratings"] == 2
    assert by_id[rated.id]["average_rating"] == 3.0
    assert by_id[unrated.id]["user_rating"] is None
    assert by_id[unrated.id]["total_ratings"] == 1


def test_user_store_listing_sorts_by_total_ratings(
    session, normal_user, make_user, make_store, add_rating
):
    busy = make_store(name="Zed Mart")
    quiet = make_store(name="Acme")
    add_rating(make_user(), busy, 3)
    add_rating(make_user(), busy, 3)

    stores = directory.list_stores_for_user(
        session, normal_user.id, {}, sort_by="total_ratings", sort_order="desc"
    )

    assert [s["id"] for s in stores] == [busy.id, quiet.id]


def test_user_store_listing_ignores_email_sort(session, normal_user, make_store):
    make_store(name="Beta", email="a@example.com")
    make_store(name="Alpha", email="z@example.com")

    stores = directory.list_stores_for_user(session, normal_user.id, {}, sort_by="email")

    assert [s["name"] for s in stores] == ["Alpha", "Beta"]


def test_injected_sort_over_http_matches_name_sort(client, admin, make_user):
    make_user(name="Zoe Saldana Of The Galaxy Team")
    make_user(name="Adam Driver Of The Star Fleet")

    by_name = client.get("/admin/users", params={"sortBy": "name"}, headers=auth_header(admin))
    injected = client.get("/admin/users", params={"sortBy": INJECTION}, headers=auth_header(admin))

    assert by_name.status_code == 200
    assert injected.status_code == 200
    assert injected.json()["data"] == by_name.json()["data"]
    assert [u["name"] for u in by_name.json()["data"]["users"]][0].startswith("Adam")


def test_store_listing_only_returns_matching_store(client, normal_user, make_store):
    make_store(name="Green Grocer", address="1 Leaf Lane")
    make_store(name="Green Garage", address="2 Motor Road")

    resp = client.get(
        "/stores",
        params={"name": "green", "address": "LEAF"},
        headers=auth_header(normal_user),
    )

    assert resp.status_code == 200
    assert [s["name"] for s in resp.json()["data"]["stores"]] == ["Green Grocer"]


@pytest.mark.parametrize("sort_by", ["name", "email", "address"])
def test_string_sort_columns_are_lowered(sort_by):
    from sqlmodel import select

    compiled = str(apply_sort(select(User), USER_SORT_COLUMNS, sort_by, "desc"))

    assert f"lower(users.{sort_by}) DESC" in compiled


def test_store_listing_sorts_names_case_insensitively(session, normal_user, make_store):
    make_store(name="banana Stand")
    make_store(name="Apple Cart")
    make_store(name="cherry Orchard")

    stores = directory.list_stores_for_user(session, normal_user.id, {}, sort_by="name")

    assert [s["name"] for s in stores] == ["Apple Cart", "banana Stand", "cherry Orchard"]


def test_role_sort_is_alphabetical(session, make_user):
    make_user(role=UserRoleEnum.user)
    make_user(role=UserRoleEnum.store_owner)
    make_user(role=UserRoleEnum.admin)

    users = directory.list_users(session, {}, sort_by="role", sort_order="asc")

    assert [u.role for u in users] == [
        UserRoleEnum.admin,
        UserRoleEnum.store_owner,
        UserRoleEnum.user,
    ]
