"""
Session identity and role checks.

Sign-in itself belongs to the OAuth provider; this module only links a provider
account to a local user, remembers that user in the signed session cookie, and
gates views on the user's role.
"""

from functools import wraps
from flask import session, current_app

from bobatcal import db
from bobatcal.errors import AuthorizationError, ForbiddenError
from bobatcal.models import User, Role


def find_or_create_user(provider, provider_account_id, name=None, image=None, email=None):
    """
    Return the local user for a provider account, creating it on first sign-in.

    New users always start as Role.USER. Profile fields are refreshed on every
    sign-in; the role never is.
    """
    user = User.query.filter_by(
        provider=provider,
        provider_account_id=str(provider_account_id)
    ).first()

    if user:
        user.name = name or user.name
        user.image = image or user.image
        user.email = email or user.email
    else:
        user = User(
            provider=provider,
            provider_account_id=str(provider_account_id),
            name=name,
            image=image,
            email=email,
            role=Role.USER,
        )
        db.session.add(user)
        current_app.logger.info(f"Created user for {provider} account {provider_account_id}")

    db.session.commit()
    return user


def set_user_session(user):
    """Set session variables for a signed-in user."""
    session['user_id'] = user.id
    session['user_name'] = user.name
    session.permanent = True


def clear_user_session():
    session.pop('user_id', None)
    session.pop('user_name', None)


def get_current_user():
    """Get the currently signed-in user, or None."""
    user_id = session.get('user_id')
    if user_id:
        return db.session.get(User, user_id)
    return None


def require_role(user, role):
    """
    Capability gate.

    Raises AuthorizationError when nobody is signed in and ForbiddenError
    when the user's role is not ``role``. Returns the user otherwise.
    """
    if user is None:
        raise AuthorizationError()
    if role is not None and user.role != role:
        raise ForbiddenError()
    return user


def login_required(f):
    """Decorator to require a signed-in user of any role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        require_role(get_current_user(), None)
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require a signed-in admin."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        require_role(get_current_user(), Role.ADMIN)
        return f(*args, **kwargs)
    return decorated_function
