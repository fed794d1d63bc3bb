from flask import Blueprint, jsonify
from ....services.agent import AgentService
from ....services.split import split
from ..helpers import get_json_body, parse_id, parse_number, parse_string

bp = Blueprint('agents', __name__)

@bp.route('', methods=['POST'])
def create_agent():
    data = get_json_body()
    agent = AgentService.create_agent(
        name=parse_string(data, 'name', required=True),
        email=parse_string(data, 'email', required=True),
        phone=parse_string(data, 'phone'),
        can_create_sub_agent=bool(data.get('can_create_sub_agent', False))
    )
    return jsonify({'success': True, 'agent': agent.to_dict()}), 201

@bp.route('/<int:agent_id>/sub-agents', methods=['POST'])
def create_sub_agent(agent_id):
    data = get_json_body()
    sub_agent = AgentService.create_sub_agent(
        parent_agent_id=agent_id,
        name=parse_string(data, 'name', required=True),
        email=parse_string(data, 'email', required=True),
        phone=parse_string(data, 'phone')
    )
    return jsonify({'success': True, 'sub_agent': sub_agent.to_dict()}), 201

@bp.route('/<int:agent_id>/commissions', methods=['GET'])
def get_agent_commissions(agent_id):
    commissions = AgentService.get_agent_commissions(agent_id)
    return jsonify({'commissions': [c.to_dict() for c in commissions]})

@bp.route('/transactions', methods=['POST'])
def process_transaction():
    """Split the commission of a sub-agent transaction between it and its parent"""
    data = get_json_body()
    record = AgentService.process_transaction(parse_id(data, 'sub_agent_id'), parse_number(data, 'amount'))
    return jsonify({'success': True, 'commission': record.to_dict()}), 201

@bp.route('/split', methods=['POST'])
def preview_split():
    """Compute a split without recording it; missing rates use the configured settings"""
    data = get_json_body()
    settings = AgentService.get_split_settings()

    base_rate = parse_number(data, 'base_commission', required=False)
    parent_share = parse_number(data, 'parent_share', required=False)
    result = split(
        parse_number(data, 'amount'),
        settings['base_commission'] if base_rate is None else base_rate,
        settings['parent_share'] if parent_share is None else parent_share
    )
    return jsonify(result._asdict())

@bp.route('/settings', methods=['GET'])
def get_split_settings():
    return jsonify(AgentService.get_split_settings())

@bp.route('/settings', methods=['PUT'])
def update_split_settings():
    data = get_json_body()
    settings = AgentService.update_split_settings(
        parse_number(data, 'base_commission'),
        parse_number(data, 'parent_share')
    )
    return jsonify({'success': True, 'settings': settings})
