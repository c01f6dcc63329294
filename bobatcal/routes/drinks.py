from flask import Blueprint, request, jsonify

from bobatcal.auth import get_current_user, require_role
from bobatcal.schemas import RatingSubmit, parse_body
from bobatcal.services.ratings import get_drink_ratings, upsert_rating

drinks_bp = Blueprint('drinks', __name__, url_prefix='/drinks')


@drinks_bp.route('/<int:drink_id>/ratings', methods=['GET'])
def list_ratings(drink_id):
    """Ratings for a drink, newest first, with averageRating and ratingCount."""
    return jsonify(get_drink_ratings(drink_id))


@drinks_bp.route('/<int:drink_id>/ratings', methods=['POST'])
def submit_rating(drink_id):
    """
    Create or update the signed-in user's rating for a drink.

    Any role may rate. Body: {ratingValue: 1-5, reviewText?: <=1000 chars}
    """
    user = require_role(get_current_user(), None)
    data = parse_body(RatingSubmit, request.get_json(silent=True))
    rating = upsert_rating(user, drink_id, data)
    return jsonify(rating.to_dict()), 200
