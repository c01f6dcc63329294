"""
Google Places API integration for the add-shop form.

Uses the Google Places API (New) for:
- Place Autocomplete (search as you type)
- Place Details (address parts, phone and opening hours for a selected shop)

Requires: GOOGLE_PLACES_API_KEY environment variable
"""

import requests
from flask import current_app


class PlacesService:
    """Service for Google Places API interactions."""

    # Google Places API endpoints
    AUTOCOMPLETE_URL = "https://places.googleapis.com/v1/places:autocomplete"
    DETAILS_URL = "https://places.googleapis.com/v1/places"

    SHOP_TYPES = ['cafe', 'coffee_shop', 'tea_house', 'juice_shop', 'dessert_shop']
    DETAILS_FIELDS = 'id,displayName,formattedAddress,addressComponents,nationalPhoneNumber,regularOpeningHours'
    TIMEOUT = 10

    @property
    def api_key(self):
        return current_app.config.get('GOOGLE_PLACES_API_KEY')

    def is_configured(self) -> bool:
        """Check if the API key is configured."""
        return bool(self.api_key)

    def _location_bias(self):
        lat = current_app.config.get('PLACES_BIAS_LAT')
        lng = current_app.config.get('PLACES_BIAS_LNG')
        if not lat or not lng:
            return None
        try:
            center = {'latitude': float(lat), 'longitude': float(lng)}
        except ValueError:
            current_app.logger.warning(f"Ignoring invalid Places bias {lat},{lng}")
            return None
        return {'circle': {'center': center, 'radius': 50000.0}}  # 50km radius

    def search_places(self, query: str) -> dict:
        """
        Search for shops using autocomplete.

        Args:
            query: Search text (e.g., "boba san jose")

        Returns:
            dict with 'success', 'places' (list), and 'error' (if failed)
        """
        if not self.api_key:
            return {
                'success': False,
                'places': [],
                'error': 'Google Places API key not configured'
            }

        if not query or len(query) < 2:
            return {
                'success': True,
                'places': [],
                'error': None
            }

        headers = {
            'Content-Type': 'application/json',
            'X-Goog-Api-Key': self.api_key,
        }
        body = {
            'input': query,
            'includedPrimaryTypes': self.SHOP_TYPES,
            'languageCode': 'en',
        }
        bias = self._location_bias()
        if bias:
            body['locationBias'] = bias

        try:
            response = requests.post(
                self.AUTOCOMPLETE_URL,
                headers=headers,
                json=body,
                timeout=self.TIMEOUT
            )

            if response.status_code != 200:
                current_app.logger.error(f"Places API error: {response.status_code} - {response.text}")
                return {
                    'success': False,
                    'places': [],
                    'error': f'API error: {response.status_code}'
                }

            suggestions = response.json().get('suggestions', [])

        except requests.exceptions.Timeout:
            current_app.logger.error("Places API timeout")
            return {
                'success': False,
                'places': [],
                'error': 'Request timed out'
            }
        except requests.exceptions.RequestException as e:
            current_app.logger.error(f"Places API exception: {e}")
            return {
                'success': False,
                'places': [],
                'error': 'Places lookup failed'
            }

        places = []
        for suggestion in suggestions:
            prediction = suggestion.get('placePrediction', {})
            if prediction:
                structured = prediction.get('structuredFormat', {})
                places.append({
                    'placeId': prediction.get('placeId'),
                    'name': structured.get('mainText', {}).get('text', ''),
                    'address': structured.get('secondaryText', {}).get('text', ''),
                    'description': prediction.get('text', {}).get('text', ''),
                })

        return {
            'success': True,
            'places': places,
            'error': None
        }

    def get_place_details(self, place_id: str) -> dict:
        """
        Get detailed information about a place, shaped like a new shop.

        Args:
            place_id: Google Place ID

        Returns:
            dict with 'success', 'place' (dict), and 'error' (if failed)
        """
        if not self.api_key:
            return {
                'success': False,
                'place': None,
                'error': 'Google Places API key not configured'
            }

        if not place_id:
            return {
                'success': False,
                'place': None,
                'error': 'Place ID required'
            }

        headers = {
            'Content-Type': 'application/json',
            'X-Goog-Api-Key': self.api_key,
            'X-Goog-FieldMask': self.DETAILS_FIELDS,
        }

        try:
            response = requests.get(
                f"{self.DETAILS_URL}/{place_id}",
                headers=headers,
                timeout=self.TIMEOUT
            )

            if response.status_code != 200:
                current_app.logger.error(f"Places Details API error: {response.status_code} - {response.text}")
                return {
                    'success': False,
                    'place': None,
                    'error': f'API error: {response.status_code}'
                }

            data = response.json()

        except requests.exceptions.Timeout:
            current_app.logger.error("Places Details API timeout")
            return {
                'success': False,
                'place': None,
                'error': 'Request timed out'
            }
        except requests.exceptions.RequestException as e:
            current_app.logger.error(f"Places Details API exception: {e}")
            return {
                'success': False,
                'place': None,
                'error': 'Places lookup failed'
            }

        return {
            'success': True,
            'place': parse_place_details(data),
            'error': None
        }


def _address_component(components, component_type):
    for component in components:
        if component_type in component.get('types', []):
            return component.get('shortText') or component.get('longText')
    return None


def parse_place_details(data: dict) -> dict:
    """Map a Place Details payload onto the shop creation fields."""
    components = data.get('addressComponents', [])
    weekday_hours = data.get('regularOpeningHours', {}).get('weekdayDescriptions', [])

    return {
        'placeId': data.get('id'),
        'name': data.get('displayName', {}).get('text', ''),
        'address': data.get('formattedAddress', ''),
        'city': _address_component(components, 'locality'),
        'zipCode': _address_component(components, 'postal_code'),
        'phone': data.get('nationalPhoneNumber') or None,
        'hours': '\n'.join(weekday_hours) or None,
    }


# Singleton instance
places_service = PlacesService()
