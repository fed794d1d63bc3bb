"""Tiered commission-rate resolver.

A partner's tier decides the *recommended* commission rate through a
``CommissionRateTable``. Operators may still apply any rate in [0, 1] to a
given commission; ``is_overridden`` reports when the applied rate differs
from the recommendation.

The status lifecycle of a commission is a small state machine::

    pending -> paid        (stamps paid_at)
    pending -> cancelled

``paid`` and ``cancelled`` are terminal.
"""

import enum
import logging
import math
from datetime import datetime

from partnerhub.errors import InvalidRateError, InvalidTransitionError

logger = logging.getLogger(__name__)


class PartnerTier(enum.Enum):
    STANDARD = 'standard'
    VIP = 'vip'
    TOP = 'top'


# Subscription plan names used by partner profiles
TIER_ALIASES = {
    'premium': PartnerTier.VIP,
}

STATUS_PENDING = 'pending'
STATUS_PAID = 'paid'
STATUS_CANCELLED = 'cancelled'
COMMISSION_STATUSES = (STATUS_PENDING, STATUS_PAID, STATUS_CANCELLED)

ALLOWED_TRANSITIONS = {
    STATUS_PENDING: {STATUS_PAID, STATUS_CANCELLED},
    STATUS_PAID: set(),
    STATUS_CANCELLED: set(),
}


def validate_rate(rate, field='rate'):
    """Return ``rate`` as a float or raise InvalidRateError if outside [0, 1]"""
    if isinstance(rate, bool):
        raise InvalidRateError(rate, field)
    try:
        value = float(rate)
    except (TypeError, ValueError):
        raise InvalidRateError(rate, field)
    if not math.isfinite(value) or not 0 <= value <= 1:
        raise InvalidRateError(rate, field)
    return value


def parse_tier(tier):
    """Resolve a free-text tier value to a PartnerTier, or None if unknown"""
    if isinstance(tier, PartnerTier):
        return tier
    if not isinstance(tier, str):
        return None
    key = tier.strip().lower()
    if key in TIER_ALIASES:
        return TIER_ALIASES[key]
    try:
        return PartnerTier(key)
    except ValueError:
        return None


class CommissionRateTable:
    """Recommended commission rate per partner tier.

    Every tier maps to exactly one rate. Missing tiers take the default rate
    and every rate is validated on construction and update.
    """

    DEFAULT_RATES = {
        PartnerTier.STANDARD: 0.05,
        PartnerTier.VIP: 0.08,
        PartnerTier.TOP: 0.12,
    }

    def __init__(self, rates=None):
        self._rates = dict(self.DEFAULT_RATES)
        if rates:
            self.update(rates)

    @classmethod
    def from_settings(cls, settings):
        """Build a table from ``{'standard_rate': .., 'vip_rate': .., 'top_rate': ..}``"""
        rates = {}
        for tier in PartnerTier:
            key = f'{tier.value}_rate'
            if settings.get(key) is not None:
                rates[tier] = settings[key]
        return cls(rates)

    def update(self, rates):
        """Replace rates for the given tiers; nothing changes if any rate is invalid"""
        validated = {}
        for tier, rate in rates.items():
            resolved = parse_tier(tier)
            if resolved is None:
                raise ValueError(f"Unknown partner tier: {tier!r}")
            validated[resolved] = validate_rate(rate, f'{resolved.value}_rate')
        self._rates.update(validated)
        return self

    def rate_for(self, tier):
        return self._rates[tier]

    def to_settings(self):
        return {f'{tier.value}_rate': rate for tier, rate in self._rates.items()}

    def __eq__(self, other):
        if not isinstance(other, CommissionRateTable):
            return NotImplemented
        return self._rates == other._rates

    def __repr__(self):
        return f'CommissionRateTable({self.to_settings()!r})'


def recommended_rate(tier, rate_table=None):
    """Recommended rate for ``tier``; unknown tiers fall back to standard."""
    if rate_table is None:
        rate_table = CommissionRateTable()
    resolved = parse_tier(tier)
    if resolved is None:
        logger.warning(f"Unknown partner tier {tier!r}, using the standard commission rate")
        resolved = PartnerTier.STANDARD
    return rate_table.rate_for(resolved)


def is_overridden(commission, rate_table=None):
    """True if the applied rate differs from the tier's recommended rate"""
    return commission.commission_rate != recommended_rate(commission.partner_tier, rate_table)


def set_rate(commission, new_rate):
    """Apply an operator-chosen rate to a commission"""
    commission.commission_rate = validate_rate(new_rate)
    return commission


def set_status(commission, new_status, reason=None, now=None):
    """Move a commission through its status lifecycle.

    Only pending commissions can change status. Paying stamps ``paid_at``;
    cancelling records the optional reason in the commission metadata.
    """
    if not isinstance(new_status, str):
        raise ValueError(f"Status must be one of: {', '.join(COMMISSION_STATUSES)}")
    if reason is not None and not isinstance(reason, str):
        raise ValueError("Cancellation reason must be a string")

    current = commission.status or STATUS_PENDING
    if new_status not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidTransitionError(current, new_status)

    commission.status = new_status
    if new_status == STATUS_PAID:
        commission.paid_at = now or datetime.utcnow()
    elif new_status == STATUS_CANCELLED and reason:
        existing = commission.commission_metadata
        metadata = dict(existing) if isinstance(existing, dict) else {}
        metadata['cancellation_reason'] = reason
        commission.commission_metadata = metadata
    return commission
