"""
Request schemas for the JSON API.

Pydantic models validate incoming bodies. Field aliases follow the camelCase
names used on the wire (``zipCode``, ``ratingValue`` ...); the attributes stay
snake_case for the rest of the code.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from bobatcal.errors import ValidationError
from bobatcal.models.rating import MAX_REVIEW_LENGTH


class _RequestBody(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)


class ShopCreate(_RequestBody):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=300)
    city: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, alias='zipCode', max_length=20)
    phone: Optional[str] = Field(None, max_length=30)
    hours: Optional[str] = Field(None, max_length=2000)
    place_id: Optional[str] = Field(None, alias='placeId', max_length=100)

    @field_validator('city', 'zip_code', 'phone', 'hours', 'place_id')
    @classmethod
    def blank_to_none(cls, value):
        # Optional fields are stored as NULL, never as an empty string
        return value or None


class DrinkCreate(_RequestBody):
    name: str = Field(..., min_length=1, max_length=200)


class RatingSubmit(_RequestBody):
    # Strict: JSON numbers only, no bools or numeric strings
    rating_value: float = Field(..., alias='ratingValue', strict=True, ge=1.0, le=5.0, allow_inf_nan=False)
    review_text: Optional[str] = Field(None, alias='reviewText', max_length=MAX_REVIEW_LENGTH)

    @field_validator('review_text')
    @classmethod
    def blank_review_to_none(cls, value):
        return value or None


class DevLogin(_RequestBody):
    name: str = Field(..., min_length=1, max_length=100)
    provider_account_id: Optional[str] = Field(None, alias='providerAccountId', max_length=255)
    image: Optional[str] = Field(None, max_length=500)


def _field_errors(exc):
    errors = []
    for err in exc.errors():
        field = '.'.join(str(part) for part in err['loc']) or 'body'
        errors.append({'field': field, 'message': err['msg']})
    return errors


def parse_body(schema, payload):
    """
    Validate a decoded JSON payload against a schema.

    Args:
        schema: Pydantic model class
        payload: Result of ``request.get_json(silent=True)``

    Returns:
        A validated schema instance

    Raises:
        ValidationError with a list of ``{field, message}`` details
    """
    if not isinstance(payload, dict):
        raise ValidationError('Invalid request body', details=[
            {'field': 'body', 'message': 'Expected a JSON object'}
        ])
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError('Invalid input', details=_field_errors(e))
