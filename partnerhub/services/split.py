"""Parent/child commission split for agents and their sub-agents."""

import math
from collections import namedtuple

from partnerhub.services.rates import validate_rate

CommissionSplit = namedtuple('CommissionSplit', ['total_commission', 'parent_portion', 'sub_agent_portion'])


def validate_amount(amount, field='amount'):
    """Return ``amount`` as a float; it must be a finite, non-negative number"""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValueError(f"{field} must be a number")
    if not math.isfinite(amount):
        raise ValueError(f"{field} must be a finite number")
    if amount < 0:
        raise ValueError(f"{field} cannot be negative")
    return float(amount)


def split(transaction_amount, base_commission_rate, parent_share):
    """Split the commission on a transaction between a sub-agent and its parent.

    The sub-agent portion is computed by subtraction so that
    ``parent_portion + sub_agent_portion == total_commission`` holds exactly.
    """
    base_commission_rate = validate_rate(base_commission_rate, 'base_commission_rate')
    parent_share = validate_rate(parent_share, 'parent_share')
    transaction_amount = validate_amount(transaction_amount, 'transaction_amount')

    total_commission = transaction_amount * base_commission_rate
    parent_portion = total_commission * parent_share
    sub_agent_portion = total_commission - parent_portion
    return CommissionSplit(total_commission, parent_portion, sub_agent_portion)
