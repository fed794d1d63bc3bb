from flask import Blueprint, request, jsonify, current_app
from ....services.bureau import BureauService
from ..helpers import get_json_body, parse_string

bp = Blueprint('bureaus', __name__)

@bp.route('', methods=['GET'])
def list_bureaus():
    base_url = current_app.config['BASE_URL']
    return jsonify({'bureaus': [b.to_dict(base_url) for b in BureauService.list_bureaus()]})

@bp.route('', methods=['POST'])
def add_bureau():
    """Register a syndicate bureau and email its permanent link to the president"""
    data = get_json_body()

    result = BureauService.add_bureau(
        name=parse_string(data, 'name', required=True),
        president_email=parse_string(data, 'president_email', required=True),
        city=parse_string(data, 'city')
    )
    return jsonify({
        'success': True,
        'created': result['created'],
        'email_sent': result['email_sent'],
        'bureau': result['bureau'].to_dict(current_app.config['BASE_URL'])
    }), 201 if result['created'] else 200

@bp.route('/<int:bureau_id>/workers', methods=['POST'])
def add_worker(bureau_id):
    """Add a worker to a bureau and email its own permanent link"""
    data = get_json_body()

    result = BureauService.add_worker(
        bureau_id,
        name=parse_string(data, 'name', required=True),
        email=parse_string(data, 'email', required=True),
        phone=parse_string(data, 'phone'),
        access_level=parse_string(data, 'access_level') or 'limited'
    )
    return jsonify({
        'success': True,
        'created': result['created'],
        'email_sent': result['email_sent'],
        'worker': result['worker'].to_dict(current_app.config['BASE_URL'])
    }), 201 if result['created'] else 200

@bp.route('/workers', methods=['GET'])
def list_workers():
    bureau_id = request.args.get('bureau_id', type=int)
    base_url = current_app.config['BASE_URL']
    return jsonify({'workers': [w.to_dict(base_url) for w in BureauService.list_workers(bureau_id)]})

@bp.route('/resend-link', methods=['POST'])
def resend_link():
    data = get_json_body()

    result = BureauService.resend_link(
        parse_string(data, 'email', required=True),
        account_type=parse_string(data, 'type') or 'bureau'
    )
    return jsonify({'success': True, 'email_sent': result['email_sent']})

@bp.route('/access/<token>', methods=['GET'])
def resolve_access_link(token):
    """Resolve the token of a permanent link to the bureau or worker it opens"""
    result = BureauService.resolve_token(token)
    data = {'type': result['type'], 'bureau': result['bureau'].to_dict()}
    if result['type'] == 'worker':
        data['worker'] = result['worker'].to_dict()
    return jsonify(data)
