"""
Drink rating operations.

Averages are never stored; each read folds the live rating rows again. A drink
with no ratings reports ``averageRating`` as null on every endpoint.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from flask import current_app
from sqlalchemy import func
from sqlalchemy.orm import joinedload
from sqlalchemy.dialects import postgresql, sqlite

from bobatcal import db
from bobatcal.errors import NotFoundError
from bobatcal.models import Drink, Rating, Shop


def round_rating(value):
    """Round half-up to one decimal place (4.25 -> 4.3)."""
    return float(Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def summarize(values):
    """
    Fold rating values into (average, count).

    Returns:
        tuple: (average rounded to one decimal or None when empty, count)
    """
    values = list(values)
    if not values:
        return None, 0
    return round_rating(sum(values) / len(values)), len(values)


def _insert_for_dialect():
    dialect = db.engine.dialect.name
    if dialect == 'postgresql':
        return postgresql.insert
    if dialect == 'sqlite':
        return sqlite.insert
    raise RuntimeError(f"Rating upsert is not supported on {dialect}")


def upsert_rating(user, drink_id, data):
    """
    Create or replace the user's rating for a drink.

    Runs as one INSERT ... ON CONFLICT (user_id, drink_id) DO UPDATE, so the
    unique constraint decides between concurrent submissions. A missing review
    clears any previous one.

    Args:
        user: Signed-in User
        drink_id: Target drink id
        data: Validated RatingSubmit

    Returns:
        The stored Rating

    Raises:
        NotFoundError if the drink does not exist
    """
    drink = db.session.get(Drink, drink_id)
    if not drink:
        raise NotFoundError('Drink not found')

    now = datetime.utcnow()
    insert = _insert_for_dialect()
    stmt = insert(Rating).values(
        user_id=user.id,
        drink_id=drink.id,
        rating_value=data.rating_value,
        review_text=data.review_text,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=['user_id', 'drink_id'],
        set_={
            'rating_value': stmt.excluded.rating_value,
            'review_text': stmt.excluded.review_text,
            'updated_at': stmt.excluded.updated_at,
        },
    )
    db.session.execute(stmt)
    db.session.commit()

    rating = Rating.query.filter_by(user_id=user.id, drink_id=drink.id).one()
    current_app.logger.info(
        f"Saved rating {rating.rating_value} for drink {drink.id} by user {user.id}"
    )
    return rating


def get_drink_ratings(drink_id):
    """
    Get every rating for a drink, newest first, with the average and count.

    Raises:
        NotFoundError if the drink does not exist
    """
    drink = db.session.get(Drink, drink_id)
    if not drink:
        raise NotFoundError('Drink not found')

    ratings = Rating.query.options(joinedload(Rating.user)).filter_by(drink_id=drink.id).order_by(
        Rating.created_at.desc(), Rating.id.desc()
    ).all()

    average, count = summarize(r.rating_value for r in ratings)
    return {
        'averageRating': average,
        'ratingCount': count,
        'ratings': [r.to_dict(include_user=True) for r in ratings],
    }


def list_drinks_with_ratings(shop_id):
    """
    List a shop's drinks alphabetically, each with its average and count.

    The aggregates come from a single grouped query over all of the shop's
    drinks. An empty menu is returned as an empty list; only an unknown shop
    raises NotFoundError.
    """
    rows = db.session.query(
        Drink,
        func.avg(Rating.rating_value),
        func.count(Rating.id),
    ).outerjoin(Rating, Rating.drink_id == Drink.id).filter(
        Drink.shop_id == shop_id
    ).group_by(Drink.id).order_by(Drink.name.asc(), Drink.id.asc()).all()

    if not rows and not db.session.get(Shop, shop_id):
        raise NotFoundError('Shop not found')

    drinks = []
    for drink, average, count in rows:
        data = drink.to_dict()
        data['averageRating'] = round_rating(average) if count else None
        data['ratingCount'] = count
        drinks.append(data)
    return drinks
