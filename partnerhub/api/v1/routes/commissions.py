from flask import Blueprint, request, jsonify
from ....services.commission import CommissionService
from ..helpers import get_json_body, parse_number, parse_string, require_fields

bp = Blueprint('commissions', __name__)

@bp.route('', methods=['GET'])
def list_commissions():
    """List commissions with the dashboard summary"""
    status = request.args.get('status')
    search = request.args.get('search')

    rate_table = CommissionService.get_rate_table()
    commissions = CommissionService.list_commissions(status=status, search=search)

    return jsonify({
        'commissions': [c.to_dict(rate_table) for c in commissions],
        'summary': CommissionService.get_summary()
    })

@bp.route('', methods=['POST'])
def create_commission():
    data = get_json_body()
    require_fields(data, 'affiliate_id', 'referral_id')

    metadata = data.get('metadata')
    if metadata is not None and not isinstance(metadata, dict):
        raise ValueError("metadata must be a JSON object")

    commission = CommissionService.create_commission(
        affiliate_id=str(data['affiliate_id']),
        referral_id=str(data['referral_id']),
        base_amount=parse_number(data, 'base_amount'),
        partner_tier=parse_string(data, 'partner_tier') or 'standard',
        commission_rate=parse_number(data, 'commission_rate', required=False),
        currency=parse_string(data, 'currency'),
        metadata=metadata
    )
    return jsonify({'success': True, 'commission': commission.to_dict(CommissionService.get_rate_table())}), 201

@bp.route('/affiliates/<affiliate_id>', methods=['GET'])
def list_affiliate_commissions(affiliate_id):
    """Commissions earned by one affiliate, optionally filtered by status"""
    rate_table = CommissionService.get_rate_table()
    commissions = CommissionService.get_affiliate_commissions(affiliate_id, status=request.args.get('status'))
    return jsonify({
        'affiliate_id': affiliate_id,
        'commissions': [c.to_dict(rate_table) for c in commissions],
        'total_amount': sum(c.commission_amount for c in commissions)
    })

@bp.route('/<int:commission_id>/rate', methods=['PATCH'])
def update_commission_rate(commission_id):
    data = get_json_body()
    new_rate = parse_number(data, 'commission_rate')

    commission = CommissionService.update_rate(commission_id, new_rate)
    return jsonify({
        'success': True,
        'message': f"The new rate is {commission.commission_rate * 100:.1f}%.",
        'commission': commission.to_dict(CommissionService.get_rate_table())
    })

@bp.route('/<int:commission_id>/status', methods=['PATCH'])
def update_commission_status(commission_id):
    data = get_json_body()

    result = CommissionService.update_status(
        commission_id,
        parse_string(data, 'status', required=True),
        reason=parse_string(data, 'reason'),
        notify_email=parse_string(data, 'notify_email')
    )
    return jsonify({
        'success': True,
        'commission': result['commission'].to_dict(CommissionService.get_rate_table()),
        'notification_sent': result['notification_sent']
    })

@bp.route('/settings', methods=['GET'])
def get_commission_settings():
    return jsonify({'rates': CommissionService.get_rate_table().to_settings()})

@bp.route('/settings', methods=['PUT'])
def update_commission_settings():
    """Update recommended rates, e.g. ``{"rates": {"standard": 0.05, "vip": 0.08}}``"""
    data = get_json_body()
    new_rates = data.get('rates')
    if not isinstance(new_rates, dict) or not new_rates:
        raise ValueError("Missing required parameter: rates")

    table = CommissionService.update_rate_table(new_rates)
    return jsonify({'success': True, 'rates': table.to_settings()})
