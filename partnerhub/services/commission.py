from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from flask import current_app
from .. import db
from ..errors import EmailDeliveryError, NotFoundError, StoreError
from ..models.commission import Commission
from ..models.commission_settings import CommissionSettings
from . import rates
from .email import EmailService
from .split import validate_amount


def commit_or_raise(action):
    """Commit the session; on failure roll back, log and raise StoreError"""
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error {action}: {str(e)}")
        raise StoreError(f"Error {action}") from e


class CommissionService:
    """Service for affiliate commissions and the tier rate table"""

    @staticmethod
    def get_rate_table():
        """Load the recommended rate per tier from the commission settings"""
        settings = {
            f'{tier.value}_rate': CommissionSettings.get_value(f'{tier.value}_rate')
            for tier in rates.PartnerTier
        }
        return rates.CommissionRateTable.from_settings(settings)

    @staticmethod
    def update_rate_table(new_rates):
        """Validate and persist recommended rates, e.g. ``{'vip': 0.09}``"""
        table = CommissionService.get_rate_table().update(new_rates)
        for key, value in table.to_settings().items():
            CommissionSettings.set_value(key, value, commit=False)
        commit_or_raise("updating commission rate table")
        current_app.logger.info(f"Commission rate table updated: {table.to_settings()}")
        return table

    @staticmethod
    def get_commission(commission_id):
        commission = db.session.get(Commission, commission_id)
        if not commission:
            raise NotFoundError(f"Commission {commission_id} not found")
        return commission

    @staticmethod
    def create_commission(affiliate_id, referral_id, base_amount, partner_tier='standard',
                          commission_rate=None, currency=None, commission_type='referral', metadata=None):
        """Create a pending commission at the partner tier's recommended rate unless a rate is given"""
        base_amount = validate_amount(base_amount, 'base_amount')
        if metadata is not None and not isinstance(metadata, dict):
            raise ValueError("metadata must be a JSON object")
        if not isinstance(partner_tier, (str, rates.PartnerTier)):
            raise ValueError("partner_tier must be a string")
        if isinstance(partner_tier, rates.PartnerTier):
            partner_tier = partner_tier.value
        if commission_rate is None:
            commission_rate = rates.recommended_rate(partner_tier, CommissionService.get_rate_table())

        commission = Commission(
            affiliate_id=affiliate_id,
            referral_id=referral_id,
            base_amount=base_amount,
            commission_rate=commission_rate,
            partner_tier=partner_tier,
            currency=currency or current_app.config.get('DEFAULT_CURRENCY', 'GNF'),
            commission_type=commission_type,
            metadata=metadata
        )
        db.session.add(commission)
        commit_or_raise("creating commission")
        return commission

    @staticmethod
    def list_commissions(status=None, search=None):
        """Commissions newest first, filtered by status and affiliate/referral identifier"""
        query = Commission.query
        if status and status != 'all':
            query = query.filter(Commission.status == status)
        if search:
            # % and _ in the search text match literally
            term = search.strip().lower().replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
            pattern = f"%{term}%"
            query = query.filter(or_(
                db.func.lower(Commission.affiliate_id).like(pattern, escape='\\'),
                db.func.lower(Commission.referral_id).like(pattern, escape='\\')
            ))
        return query.order_by(Commission.created_at.desc(), Commission.id.desc()).all()

    @staticmethod
    def get_affiliate_commissions(affiliate_id, status=None):
        if status and status not in rates.COMMISSION_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(rates.COMMISSION_STATUSES)}")
        return Commission.get_affiliate_commissions(affiliate_id, status=status)

    @staticmethod
    def get_summary():
        """Totals shown on the commission dashboard"""
        commissions = Commission.query.all()
        by_status = {status: 0 for status in rates.COMMISSION_STATUSES}
        for commission in commissions:
            by_status[commission.status] = by_status.get(commission.status, 0) + 1

        return {
            'total_commissions': len(commissions),
            'total_amount': sum(c.commission_amount for c in commissions),
            'pending_commissions': by_status[rates.STATUS_PENDING],
            'paid_commissions': by_status[rates.STATUS_PAID],
            'cancelled_commissions': by_status[rates.STATUS_CANCELLED]
        }

    @staticmethod
    def update_rate(commission_id, new_rate):
        """Override the applied rate of a commission"""
        commission = CommissionService.get_commission(commission_id)
        commission.set_rate(new_rate)
        commit_or_raise(f"updating rate of commission {commission_id}")
        current_app.logger.info(f"Commission {commission_id} rate set to {commission.commission_rate:.3f}")
        return commission

    @staticmethod
    def update_status(commission_id, new_status, reason=None, notify_email=None):
        """Change the status of a commission and optionally notify the affiliate.

        The status change and the notification are independent: when the
        email fails after the status was committed, the change is kept and
        the result reports ``notification_sent: False``.
        """
        commission = CommissionService.get_commission(commission_id)
        commission.set_status(new_status, reason=reason)
        commit_or_raise(f"updating status of commission {commission_id}")
        current_app.logger.info(f"Commission {commission_id} status set to {new_status}")

        notification_sent = False
        if notify_email and current_app.config.get('COMMISSION_NOTIFICATIONS_ENABLED', True):
            try:
                EmailService.send_commission_status(notify_email, commission)
                notification_sent = True
            except EmailDeliveryError as e:
                current_app.logger.error(
                    f"Partial failure: commission {commission_id} is now {new_status} "
                    f"but the notification to {notify_email} was not sent: {str(e)}"
                )

        return {'commission': commission, 'notification_sent': notification_sent}
