"""
Rating ledger: one rating per (user, store), aggregates computed on read.

Every write here is a single statement committed on its own. The composite
unique constraint on ratings(user_id, store_id) is what keeps concurrent
submissions for the same pair down to one row; `submit_rating` falls back to an
update when its insert loses that race.
"""
import logging
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from storerating.api.core.response import api_response, raiseExceptions
from storerating.api.models import Rating, Store
from storerating.api.models.ratingModel import MAX_RATING, MIN_RATING

logger = logging.getLogger(__name__)


class RatingAggregate(NamedTuple):
    average: float
    count: int


def _find_rating(session: Session, user_id: int, store_id: int) -> Optional[Rating]:
    return session.exec(
        select(Rating).where(
            Rating.user_id == user_id,
            Rating.store_id == store_id,
        )
    ).first()


def _require_store(session: Session, store_id: int) -> Store:
    store = session.get(Store, store_id)
    raiseExceptions((store, 404, "Store not found"))
    return store


def validate_rating_value(rating) -> int:
    # bool is an int subclass; reject it along with floats like 3.5
    if isinstance(rating, bool) or not isinstance(rating, int):
        api_response(400, f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}")
    if rating < MIN_RATING or rating > MAX_RATING:
        api_response(400, f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


def submit_rating(
    session: Session, user_id: int, store_id: int, rating
) -> tuple[Rating, bool]:
    """
    Insert or overwrite the caller's rating for a store.

    Returns the stored row and whether it was newly created. The store check
    runs before the value check, so a missing store is a 404 whatever the
    rating.
    """
    _require_store(session, store_id)
    validate_rating_value(rating)

    now = datetime.now(timezone.utc)
    existing = _find_rating(session, user_id, store_id)
    if existing:
        existing.rating = rating
        existing.updated_at = now
        session.add(existing)
        session.commit()
        session.refresh(existing)
        logger.info("Rating updated: user=%s store=%s rating=%s", user_id, store_id, rating)
        return existing, False

    new_rating = Rating(
        user_id=user_id,
        store_id=store_id,
        rating=rating,
        created_at=now,
        updated_at=now,
    )
    session.add(new_rating)
    try:
        session.commit()
    except IntegrityError:
        # A concurrent request inserted this pair first; last writer wins
        session.rollback()
        existing = _find_rating(session, user_id, store_id)
        if existing is None:
            raise
        existing.rating = rating
        existing.updated_at = datetime.now(timezone.utc)
        session.add(existing)
        session.commit()
        session.refresh(existing)
        logger.info(
            "Rating insert raced, updated instead: user=%s store=%s rating=%s",
            user_id,
            store_id,
            rating,
        )
        return existing, False

    session.refresh(new_rating)
    logger.info("Rating created: user=%s store=%s rating=%s", user_id, store_id, rating)
    return new_rating, True


def get_user_rating(session: Session, user_id: int, store_id: int) -> Optional[int]:
    return session.exec(
        select(Rating.rating).where(
            Rating.user_id == user_id,
            Rating.store_id == store_id,
        )
    ).first()


def remove_rating(session: Session, user_id: int, store_id: int) -> None:
    _require_store(session, store_id)
    existing = _find_rating(session, user_id, store_id)
    raiseExceptions((existing, 404, "Rating not found"))

    session.delete(existing)
    session.commit()
    logger.info("Rating removed: user=%s store=%s", user_id, store_id)


def aggregate_for_store(session: Session, store_id: int) -> RatingAggregate:
    """Full-precision average and row count; (0.0, 0) when unrated."""
    average, count = session.exec(
        select(
            func.avg(Rating.rating),
            func.count(Rating.id),
        ).where(Rating.store_id == store_id)
    ).one()
    return RatingAggregate(
        average=float(average) if average is not None else 0.0,
        count=int(count or 0),
    )


def rating_distribution(session: Session, store_id: int) -> dict[int, int]:
    rows = session.exec(
        select(Rating.rating, func.count(Rating.id))
        .where(Rating.store_id == store_id)
        .group_by(Rating.rating)
    ).all()

    distribution = {star: 0 for star in range(MIN_RATING, MAX_RATING + 1)}
    for star, count in rows:
        distribution[star] = int(count)
    return distribution
