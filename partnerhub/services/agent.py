from flask import current_app
from .. import db
from ..errors import NotFoundError
from ..models.agent import Agent, SubAgent, AgentCommission
from ..models.commission_settings import CommissionSettings
from .commission import commit_or_raise
from .rates import validate_rate
from .split import split

class AgentService:
    """Service for agents, sub-agents and the split of their commissions"""

    @staticmethod
    def create_agent(name, email, phone=None, can_create_sub_agent=False):
        if not name or not email:
            raise ValueError("Agent name and email are required")
        if Agent.query.filter_by(email=email).first():
            raise ValueError(f"An agent with email {email} already exists")

        agent = Agent(name=name, email=email, phone=phone, can_create_sub_agent=can_create_sub_agent)
        db.session.add(agent)
        commit_or_raise("creating agent")
        current_app.logger.info(f"Agent {agent.id} created")
        return agent

    @staticmethod
    def create_sub_agent(parent_agent_id, name, email, phone=None):
        """Create a sub-agent under a parent allowed to recruit"""
        if not name or not email:
            raise ValueError("Sub-agent name and email are required")
        parent = db.session.get(Agent, parent_agent_id)
        if not parent or not parent.can_create_sub_agent:
            raise ValueError("Parent agent not found or not authorized to create sub-agents")
        if SubAgent.query.filter_by(email=email).first():
            raise ValueError(f"A sub-agent with email {email} already exists")

        sub_agent = SubAgent(parent_agent_id=parent.id, name=name, email=email, phone=phone)
        db.session.add(sub_agent)
        commit_or_raise("creating sub-agent")
        current_app.logger.info(f"Sub-agent {sub_agent.id} created under agent {parent.id}")
        return sub_agent

    @staticmethod
    def get_split_settings():
        return {
            'base_commission': CommissionSettings.get_value('base_user_commission'),
            'parent_share': CommissionSettings.get_value('parent_share_ratio')
        }

    @staticmethod
    def update_split_settings(base_commission, parent_share):
        base_commission = validate_rate(base_commission, 'base_commission')
        parent_share = validate_rate(parent_share, 'parent_share')

        CommissionSettings.set_value('base_user_commission', base_commission, commit=False)
        CommissionSettings.set_value('parent_share_ratio', parent_share, commit=False)
        commit_or_raise("updating commission split settings")
        current_app.logger.info(
            f"Commission split settings updated: base={base_commission}, parent_share={parent_share}"
        )
        return AgentService.get_split_settings()

    @staticmethod
    def process_transaction(sub_agent_id, amount):
        """Split the commission of a sub-agent transaction and record it"""
        sub_agent = db.session.get(SubAgent, sub_agent_id)
        if not sub_agent:
            raise NotFoundError(f"Sub-agent {sub_agent_id} not found")

        settings = AgentService.get_split_settings()
        result = split(amount, settings['base_commission'], settings['parent_share'])

        record = AgentCommission(
            agent_id=sub_agent.parent_agent_id,
            sub_agent_id=sub_agent.id,
            transaction_amount=amount,
            base_rate=settings['base_commission'],
            parent_share=settings['parent_share'],
            split=result
        )
        db.session.add(record)
        commit_or_raise(f"recording commission split for sub-agent {sub_agent_id}")
        return record

    @staticmethod
    def get_agent_commissions(agent_id):
        agent = db.session.get(Agent, agent_id)
        if not agent:
            raise NotFoundError(f"Agent {agent_id} not found")
        return agent.commissions.order_by(AgentCommission.created_at.desc()).all()
