from datetime import datetime
from bobatcal import db


class Drink(db.Model):
    """Menu item belonging to one shop."""
    __tablename__ = 'drinks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    shop_id = db.Column(db.Integer, db.ForeignKey('shops.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    ratings = db.relationship('Rating', backref='drink', lazy='dynamic', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Drink {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'shopId': self.shop_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
