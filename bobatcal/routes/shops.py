"""
Shop and drink menu endpoints.

Reads are public. Creating shops and drinks requires an admin session.
"""

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import IntegrityError

from bobatcal import db
from bobatcal.auth import admin_required
from bobatcal.errors import NotFoundError, ValidationError
from bobatcal.models import Shop, Drink
from bobatcal.schemas import ShopCreate, DrinkCreate, parse_body
from bobatcal.services.ratings import list_drinks_with_ratings

shops_bp = Blueprint('shops', __name__, url_prefix='/shops')

DUPLICATE_PLACE = [{'field': 'placeId', 'message': 'A shop for this place already exists'}]


def _get_shop_or_404(shop_id):
    shop = db.session.get(Shop, shop_id)
    if not shop:
        raise NotFoundError('Shop not found')
    return shop


@shops_bp.route('', methods=['GET'])
def list_shops():
    """List all shops alphabetically."""
    shops = Shop.query.order_by(Shop.name.asc(), Shop.id.asc()).all()
    return jsonify([shop.to_dict() for shop in shops])


@shops_bp.route('', methods=['POST'])
@admin_required
def create_shop():
    """
    Create a shop.

    Body:
        name, address (required); city, zipCode, phone, hours, placeId (optional)
    """
    data = parse_body(ShopCreate, request.get_json(silent=True))

    if data.place_id and Shop.query.filter_by(google_place_id=data.place_id).first():
        raise ValidationError('Invalid input', details=DUPLICATE_PLACE)

    shop = Shop(
        name=data.name,
        address=data.address,
        city=data.city,
        zip_code=data.zip_code,
        phone=data.phone,
        hours=data.hours,
        google_place_id=data.place_id,
    )
    db.session.add(shop)
    try:
        db.session.commit()
    except IntegrityError:
        # Another request claimed the same place between the check and the insert
        db.session.rollback()
        raise ValidationError('Invalid input', details=DUPLICATE_PLACE)

    current_app.logger.info(f"Created shop {shop.id}: {shop.name}")
    return jsonify(shop.to_dict()), 201


@shops_bp.route('/<int:shop_id>', methods=['GET'])
def get_shop(shop_id):
    """Get a single shop."""
    return jsonify(_get_shop_or_404(shop_id).to_dict())


@shops_bp.route('/<int:shop_id>/drinks', methods=['GET'])
def list_drinks(shop_id):
    """List a shop's drinks with their average rating and rating count."""
    return jsonify(list_drinks_with_ratings(shop_id))


@shops_bp.route('/<int:shop_id>/drinks', methods=['POST'])
@admin_required
def create_drink(shop_id):
    """Add a drink to a shop's menu."""
    shop = _get_shop_or_404(shop_id)
    data = parse_body(DrinkCreate, request.get_json(silent=True))

    drink = Drink(name=data.name, shop_id=shop.id)
    db.session.add(drink)
    db.session.commit()

    current_app.logger.info(f"Created drink {drink.id} ({drink.name}) for shop {shop.id}")
    return jsonify(drink.to_dict()), 201
