"""
Session endpoints.

The OAuth provider owns sign-in. Locally, ``/auth/dev-login`` stands in for the
provider callback when AUTH_DEV_LOGIN is enabled.
"""

from flask import Blueprint, request, jsonify, current_app, abort

from bobatcal.auth import (
    find_or_create_user,
    set_user_session,
    clear_user_session,
    get_current_user,
)
from bobatcal.schemas import DevLogin, parse_body

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

DEV_PROVIDER = 'dev'


@auth_bp.route('/session', methods=['GET'])
def current_session():
    """Who is signed in, if anyone."""
    user = get_current_user()
    return jsonify({'user': user.to_dict() if user else None})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    clear_user_session()
    return jsonify({'success': True})


@auth_bp.route('/dev-login', methods=['POST'])
def dev_login():
    """
    Sign in without the OAuth provider (local development only).

    Body:
        name (required), providerAccountId, image
    """
    if not current_app.config.get('AUTH_DEV_LOGIN'):
        abort(404)

    data = parse_body(DevLogin, request.get_json(silent=True))

    user = find_or_create_user(
        DEV_PROVIDER,
        data.provider_account_id or data.name.lower(),
        name=data.name,
        image=data.image or None,
    )
    set_user_session(user)

    current_app.logger.info(f"Dev login: user={user.id}, role={user.role.value}")
    return jsonify({'user': user.to_dict()})
