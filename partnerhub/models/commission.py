from datetime import datetime
from .. import db
from ..services import rates

class Commission(db.Model):
    """Model for an affiliate commission earned on a referral"""
    __tablename__ = 'affiliate_commission'

    id = db.Column(db.Integer, primary_key=True)
    affiliate_id = db.Column(db.String(64), nullable=False, index=True)
    referral_id = db.Column(db.String(64), nullable=False)
    partner_tier = db.Column(db.String(20), default='standard')  # free text from the partner profile
    base_amount = db.Column(db.Float, nullable=False)
    currency = db.Column(db.String(3), nullable=False, default='GNF')
    commission_rate = db.Column(db.Float, nullable=False)
    commission_type = db.Column(db.String(20), default='referral')
    status = db.Column(db.String(20), nullable=False, default=rates.STATUS_PENDING)  # pending, paid, cancelled
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    paid_at = db.Column(db.DateTime)
    commission_metadata = db.Column(db.JSON)

    def __init__(self, affiliate_id, referral_id, base_amount, commission_rate,
                 partner_tier='standard', currency='GNF', commission_type='referral',
                 status=rates.STATUS_PENDING, metadata=None):
        self.affiliate_id = affiliate_id
        self.referral_id = referral_id
        self.base_amount = base_amount
        self.commission_rate = rates.validate_rate(commission_rate)
        self.partner_tier = partner_tier
        self.currency = currency
        self.commission_type = commission_type
        self.status = status
        self.commission_metadata = metadata or {}

    @property
    def commission_amount(self):
        """Commission earned, always derived from the base amount and applied rate"""
        return self.base_amount * self.commission_rate

    def set_rate(self, new_rate):
        return rates.set_rate(self, new_rate)

    def set_status(self, new_status, reason=None):
        return rates.set_status(self, new_status, reason=reason)

    def is_overridden(self, rate_table=None):
        return rates.is_overridden(self, rate_table)

    @classmethod
    def get_affiliate_commissions(cls, affiliate_id, status=None):
        """Get all commissions for an affiliate, optionally filtered by status"""
        query = cls.query.filter_by(affiliate_id=affiliate_id)
        if status:
            query = query.filter_by(status=status)
        return query.order_by(cls.created_at.desc(), cls.id.desc()).all()

    def to_dict(self, rate_table=None):
        """Convert commission to dictionary"""
        recommended = rates.recommended_rate(self.partner_tier, rate_table)
        return {
            'id': self.id,
            'affiliate_id': self.affiliate_id,
            'referral_id': self.referral_id,
            'partner_tier': self.partner_tier,
            'base_amount': self.base_amount,
            'currency': self.currency,
            'commission_rate': self.commission_rate,
            'commission_amount': self.commission_amount,
            'recommended_rate': recommended,
            'is_overridden': self.commission_rate != recommended,
            'commission_type': self.commission_type,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'paid_at': self.paid_at.isoformat() if self.paid_at else None,
            'metadata': self.commission_metadata
        }
