from datetime import datetime
from bobatcal import db

MAX_REVIEW_LENGTH = 1000


class Rating(db.Model):
    """A user's score and optional review for one drink."""
    __tablename__ = 'ratings'

    id = db.Column(db.Integer, primary_key=True)
    rating_value = db.Column(db.Float, nullable=False)  # 1.0-5.0
    review_text = db.Column(db.String(MAX_REVIEW_LENGTH), nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    drink_id = db.Column(db.Integer, db.ForeignKey('drinks.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Unique constraint: one rating per user per drink
    __table_args__ = (
        db.UniqueConstraint('user_id', 'drink_id', name='unique_user_drink_rating'),
        db.CheckConstraint('rating_value >= 1 AND rating_value <= 5', name='valid_rating_value'),
    )

    def __repr__(self):
        return f'<Rating drink={self.drink_id} user={self.user_id} rating={self.rating_value}>'

    def to_dict(self, include_user=False):
        data = {
            'id': self.id,
            'ratingValue': self.rating_value,
            'reviewText': self.review_text,
            'userId': self.user_id,
            'drinkId': self.drink_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if include_user:
            data['user'] = {
                'name': self.user.name if self.user else None,
                'image': self.user.image if self.user else None,
            }
        return data
