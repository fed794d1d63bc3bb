from datetime import datetime
from sqlalchemy import or_
from .. import db
from ..errors import NotFoundError
from ..models.review import Review
from .commission import commit_or_raise
from .reputation import compute_reputation

# Reply filters offered on the partner review list
REVIEW_FILTERS = ('all', 'pending', 'responded')

class ReviewService:
    """Service for partner reviews, replies and reputation"""

    @staticmethod
    def add_review(partner_id, rating, comment=None, customer_id=None):
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValueError("Rating must be an integer between 1 and 5")

        review = Review(partner_id=partner_id, rating=rating, comment=comment, customer_id=customer_id)
        db.session.add(review)
        commit_or_raise("adding review")
        return review

    @staticmethod
    def reply_to_review(review_id, reply):
        if not isinstance(reply, str) or not reply.strip():
            raise ValueError("Reply cannot be empty")
        review = db.session.get(Review, review_id)
        if not review:
            raise NotFoundError(f"Review {review_id} not found")

        review.reply = reply.strip()
        review.replied_at = datetime.utcnow()
        commit_or_raise(f"replying to review {review_id}")
        return review

    @staticmethod
    def get_partner_reviews(partner_id, reply_filter='all', rating=None):
        """Reviews of a partner, newest first.

        ``reply_filter`` keeps only reviews still awaiting a reply (``pending``)
        or already answered (``responded``); ``rating`` keeps one star value.
        """
        if reply_filter not in REVIEW_FILTERS:
            raise ValueError(f"Filter must be one of: {', '.join(REVIEW_FILTERS)}")
        if rating is not None and rating not in range(1, 6):
            raise ValueError("Rating must be an integer between 1 and 5")

        query = Review.query.filter_by(partner_id=partner_id)
        answered = db.func.trim(Review.reply) != ''
        if reply_filter == 'responded':
            query = query.filter(Review.reply.isnot(None), answered)
        elif reply_filter == 'pending':
            query = query.filter(or_(Review.reply.is_(None), ~answered))
        if rating is not None:
            query = query.filter(Review.rating == rating)
        return query.order_by(Review.created_at.desc(), Review.id.desc()).all()

    @staticmethod
    def get_partner_reputation(partner_id, now=None):
        """Recompute the reputation of a partner from all of its reviews"""
        return compute_reputation(ReviewService.get_partner_reviews(partner_id), now=now)
