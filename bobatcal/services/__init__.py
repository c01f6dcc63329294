# Business logic services
from bobatcal.services.places_service import places_service
from bobatcal.services.ratings import (
    summarize,
    upsert_rating,
    get_drink_ratings,
    list_drinks_with_ratings,
)

__all__ = [
    'places_service',
    'summarize',
    'upsert_rating',
    'get_drink_ratings',
    'list_drinks_with_ratings',
]
