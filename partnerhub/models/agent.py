from datetime import datetime
from .. import db

class Agent(db.Model):
    """Top-level agent created by the PDG; may be allowed to recruit sub-agents"""
    __tablename__ = 'agent'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False, unique=True)
    phone = db.Column(db.String(32))
    can_create_sub_agent = db.Column(db.Boolean, default=False)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __init__(self, name, email, phone=None, can_create_sub_agent=False):
        self.name = name
        self.email = email
        self.phone = phone
        self.can_create_sub_agent = can_create_sub_agent

    def to_dict(self, include_sub_agents=False):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'can_create_sub_agent': self.can_create_sub_agent,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
        if include_sub_agents:
            data['sub_agents'] = [s.to_dict() for s in self.sub_agents.all()]
        return data


class SubAgent(db.Model):
    """Agent recruited by a parent agent; shares its commissions with the parent"""
    __tablename__ = 'sub_agent'

    id = db.Column(db.Integer, primary_key=True)
    parent_agent_id = db.Column(db.Integer, db.ForeignKey('agent.id'), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False, unique=True)
    phone = db.Column(db.String(32))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    parent_agent = db.relationship('Agent', backref=db.backref('sub_agents', lazy='dynamic'))

    def __init__(self, parent_agent_id, name, email, phone=None):
        self.parent_agent_id = parent_agent_id
        self.name = name
        self.email = email
        self.phone = phone

    def to_dict(self):
        return {
            'id': self.id,
            'parent_agent_id': self.parent_agent_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }


class AgentCommission(db.Model):
    """Auditable record of one transaction's commission split"""
    __tablename__ = 'agent_commission'

    id = db.Column(db.Integer, primary_key=True)
    agent_id = db.Column(db.Integer, db.ForeignKey('agent.id'), nullable=False)
    sub_agent_id = db.Column(db.Integer, db.ForeignKey('sub_agent.id'), nullable=False)
    transaction_amount = db.Column(db.Float, nullable=False)
    base_rate = db.Column(db.Float, nullable=False)
    parent_share = db.Column(db.Float, nullable=False)
    total_commission = db.Column(db.Float, nullable=False)
    parent_portion = db.Column(db.Float, nullable=False)
    sub_agent_portion = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    agent = db.relationship('Agent', backref=db.backref('commissions', lazy='dynamic'))
    sub_agent = db.relationship('SubAgent', backref=db.backref('commissions', lazy='dynamic'))

    def __init__(self, agent_id, sub_agent_id, transaction_amount, base_rate, parent_share, split):
        self.agent_id = agent_id
        self.sub_agent_id = sub_agent_id
        self.transaction_amount = transaction_amount
        self.base_rate = base_rate
        self.parent_share = parent_share
        self.total_commission = split.total_commission
        self.parent_portion = split.parent_portion
        self.sub_agent_portion = split.sub_agent_portion

    def to_dict(self):
        return {
            'id': self.id,
            'agent_id': self.agent_id,
            'sub_agent_id': self.sub_agent_id,
            'transaction_amount': self.transaction_amount,
            'base_rate': self.base_rate,
            'parent_share': self.parent_share,
            'total_commission': self.total_commission,
            'parent_portion': self.parent_portion,
            'sub_agent_portion': self.sub_agent_portion,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
