import os
from datetime import timedelta
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from dotenv import load_dotenv

# Load environment variables (override=True ensures .env values take precedence)
load_dotenv(override=True)

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def create_app(config_name=None):
    """Application factory pattern."""
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-key-change-me')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///dev.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Session configuration - 30 day persistent sessions
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(days=30)
    app.config['SESSION_COOKIE_SECURE'] = (
        os.environ.get('FLASK_ENV') == 'production' or _env_flag('SESSION_COOKIE_SECURE')
    )
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    # Google Places lookup for the shop form (optional)
    app.config['GOOGLE_PLACES_API_KEY'] = os.environ.get('GOOGLE_PLACES_API_KEY')
    app.config['PLACES_BIAS_LAT'] = os.environ.get('PLACES_BIAS_LAT')
    app.config['PLACES_BIAS_LNG'] = os.environ.get('PLACES_BIAS_LNG')

    # Development sign-in stands in for the OAuth provider locally
    app.config['AUTH_DEV_LOGIN'] = _env_flag('AUTH_DEV_LOGIN', default=app.debug)

    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
        app.config['SESSION_COOKIE_SECURE'] = False
        app.config['AUTH_DEV_LOGIN'] = True

    # Fix for postgres:// vs postgresql:// (some providers use older postgres:// format)
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgres://'):
        app.config['SQLALCHEMY_DATABASE_URI'] = app.config['SQLALCHEMY_DATABASE_URI'].replace(
            'postgres://', 'postgresql://', 1
        )

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)

    # Register blueprints
    from bobatcal.routes.main import main_bp
    from bobatcal.routes.auth import auth_bp
    from bobatcal.routes.shops import shops_bp
    from bobatcal.routes.drinks import drinks_bp
    from bobatcal.routes.places import places_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(shops_bp)
    app.register_blueprint(drinks_bp)
    app.register_blueprint(places_bp)

    from bobatcal.errors import register_error_handlers
    register_error_handlers(app)

    from bobatcal.cli import register_commands
    register_commands(app)

    # Import models so they're known to Flask-Migrate
    from bobatcal import models  # noqa: F401

    return app
