"""
Place lookup for the admin add-shop form.

Includes:
- Google Places search for shop autocomplete
- Place details shaped like the shop creation body
"""

from flask import Blueprint, request, jsonify

from bobatcal.auth import admin_required
from bobatcal.services.places_service import places_service

places_bp = Blueprint('places', __name__, url_prefix='/api/places')


@places_bp.route('/search')
@admin_required
def search_places():
    """
    Search for shops using Google Places API.

    Query params:
        q: Search query (required, min 2 chars)

    Returns:
        JSON with 'success', 'places' array, and 'error' (if any)
    """
    query = request.args.get('q', '').strip()

    if len(query) < 2:
        return jsonify({
            'success': True,
            'places': [],
            'error': None
        })

    result = places_service.search_places(query)
    return jsonify(result)


@places_bp.route('/status')
@admin_required
def places_status():
    """Check if Google Places API is configured."""
    return jsonify({
        'configured': places_service.is_configured()
    })


@places_bp.route('/<place_id>')
@admin_required
def get_place_details(place_id):
    """
    Get shop fields for a place.

    Args:
        place_id: Google Place ID

    Returns:
        JSON with 'success', 'place' object, and 'error' (if any)
    """
    result = places_service.get_place_details(place_id)
    return jsonify(result)
