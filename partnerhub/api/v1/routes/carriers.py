from flask import Blueprint, jsonify
from ....services.scoring import CarrierQuote, get_strategy, rank
from ..helpers import get_json_body, parse_number, require_fields

bp = Blueprint('carriers', __name__)

@bp.route('/compare', methods=['POST'])
def compare_carriers():
    """Rank carrier quotes, best first"""
    data = get_json_body()
    require_fields(data, 'origin', 'destination')
    quotes_data = data.get('quotes')
    if not isinstance(quotes_data, list) or not quotes_data:
        raise ValueError("Missing required parameter: quotes")

    quotes = []
    for item in quotes_data:
        if not isinstance(item, dict):
            raise ValueError("Each quote must be an object")
        quotes.append(CarrierQuote(
            carrier_id=item.get('carrier_id'),
            name=item.get('name'),
            estimated_cost=parse_number(item, 'estimated_cost'),
            performance_rating=parse_number(item, 'performance_rating'),
            service_quality=parse_number(item, 'service_quality'),
            on_time_percentage=parse_number(item, 'on_time_percentage'),
            estimated_time=item.get('estimated_time'),
            customer_rating=parse_number(item, 'customer_rating', required=False)
        ))

    strategy = get_strategy(data.get('strategy') or 'balanced', weights=data.get('weights'))
    ranked = rank(quotes, strategy)
    return jsonify({
        'strategy': strategy.name,
        'comparisons': [dict(quote._asdict(), score=round(score, 2)) for quote, score in ranked]
    })
