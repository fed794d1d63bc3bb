from flask import Blueprint, request, jsonify
from ....services.review import ReviewService
from ..helpers import get_json_body, parse_string, require_fields

bp = Blueprint('reviews', __name__)

@bp.route('/partners/<partner_id>/reputation', methods=['GET'])
def get_partner_reputation(partner_id):
    """Reputation recomputed from the partner's reviews on every request"""
    stats = ReviewService.get_partner_reputation(partner_id)
    return jsonify(stats._asdict())

@bp.route('/partners/<partner_id>/reviews', methods=['GET'])
def list_partner_reviews(partner_id):
    """Reviews filtered with ``?filter=all|pending|responded`` and ``?rating=1..5``"""
    rating = request.args.get('rating')
    if rating is not None:
        try:
            rating = int(rating)
        except ValueError:
            raise ValueError("Rating must be an integer between 1 and 5")

    reviews = ReviewService.get_partner_reviews(
        partner_id,
        reply_filter=request.args.get('filter', 'all'),
        rating=rating
    )
    return jsonify({'reviews': [r.to_dict() for r in reviews]})

@bp.route('/partners/<partner_id>/reviews', methods=['POST'])
def add_review(partner_id):
    data = get_json_body()
    require_fields(data, 'rating')

    review = ReviewService.add_review(
        partner_id=partner_id,
        rating=data['rating'],
        comment=parse_string(data, 'comment'),
        customer_id=parse_string(data, 'customer_id')
    )
    return jsonify({'success': True, 'review': review.to_dict()}), 201

@bp.route('/reviews/<int:review_id>/reply', methods=['POST'])
def reply_to_review(review_id):
    data = get_json_body()
    review = ReviewService.reply_to_review(review_id, data.get('reply'))
    return jsonify({'success': True, 'review': review.to_dict()})
