from datetime import datetime
from .. import db

class Review(db.Model):
    """Customer review of a partner, with an optional reply from the partner"""
    __tablename__ = 'review'

    id = db.Column(db.Integer, primary_key=True)
    partner_id = db.Column(db.String(64), nullable=False, index=True)
    customer_id = db.Column(db.String(64))
    rating = db.Column(db.Integer, nullable=False)  # 1 to 5
    comment = db.Column(db.Text)
    reply = db.Column(db.Text)
    replied_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __init__(self, partner_id, rating, comment=None, customer_id=None, created_at=None):
        self.partner_id = partner_id
        self.rating = rating
        self.comment = comment
        self.customer_id = customer_id
        if created_at is not None:
            self.created_at = created_at

    @property
    def has_reply(self):
        return bool(self.reply and self.reply.strip())

    def to_dict(self):
        return {
            'id': self.id,
            'partner_id': self.partner_id,
            'customer_id': self.customer_id,
            'rating': self.rating,
            'comment': self.comment,
            'reply': self.reply,
            'has_reply': self.has_reply,
            'replied_at': self.replied_at.isoformat() if self.replied_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
