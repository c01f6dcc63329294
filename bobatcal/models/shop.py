from datetime import datetime
from bobatcal import db


class Shop(db.Model):
    """Boba tea shop location."""
    __tablename__ = 'shops'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.String(300), nullable=False)
    city = db.Column(db.String(100), nullable=True)
    zip_code = db.Column(db.String(20), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    hours = db.Column(db.Text, nullable=True)
    google_place_id = db.Column(db.String(100), nullable=True, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    drinks = db.relationship('Drink', backref='shop', lazy='dynamic', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Shop {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'city': self.city,
            'zipCode': self.zip_code,
            'phone': self.phone,
            'hours': self.hours,
            'placeId': self.google_place_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
