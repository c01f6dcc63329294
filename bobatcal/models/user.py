import enum
from datetime import datetime
from bobatcal import db


class Role(enum.Enum):
    """Permission level. Only ADMIN may create shops and drinks."""
    USER = 'user'
    ADMIN = 'admin'


class User(db.Model):
    """Signed-in person, linked to an identity provider account."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    image = db.Column(db.String(500), nullable=True)
    role = db.Column(
        db.Enum(Role, name='user_role', values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=Role.USER,
    )
    provider = db.Column(db.String(50), nullable=False)
    provider_account_id = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    ratings = db.relationship('Rating', backref='user', lazy='dynamic')

    # One local user per provider account
    __table_args__ = (
        db.UniqueConstraint('provider', 'provider_account_id', name='unique_provider_account'),
    )

    def __repr__(self):
        return f'<User {self.name} ({self.role.value})>'

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'image': self.image,
            'role': self.role.value,
        }
