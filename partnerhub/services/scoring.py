"""Scoring strategies used to compare and rank options such as carrier quotes."""

import math
from collections import namedtuple

CarrierQuote = namedtuple('CarrierQuote', [
    'carrier_id',
    'name',
    'estimated_cost',
    'performance_rating',
    'service_quality',
    'on_time_percentage',
    'estimated_time',
    'customer_rating',
], defaults=(None, None))


# Quote attributes where a higher value is better
SCORABLE_FIELDS = ('performance_rating', 'service_quality', 'on_time_percentage', 'customer_rating')


class ScoringStrategy:
    """Interface: map an option to a score, higher is better"""

    name = None

    def score(self, option):
        raise NotImplementedError


class BalancedCarrierScore(ScoringStrategy):
    """Equal weight for performance rating, service quality and punctuality"""

    name = 'balanced'

    def score(self, option):
        return (option.performance_rating + option.service_quality + option.on_time_percentage) / 3


class WeightedCarrierScore(ScoringStrategy):
    """Weighted sum of quote attributes; weights are normalised to sum to 1"""

    name = 'weighted'

    def __init__(self, weights):
        if not isinstance(weights, dict) or not weights:
            raise ValueError("At least one weight is required")
        if any(isinstance(w, bool) or not isinstance(w, (int, float)) for w in weights.values()):
            raise ValueError("Weights must be numbers")
        if not all(math.isfinite(w) for w in weights.values()):
            raise ValueError("Weights must be finite numbers")
        unknown = set(weights) - set(SCORABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot score on: {', '.join(sorted(unknown))}")
        if any(w < 0 for w in weights.values()):
            raise ValueError("Weights cannot be negative")
        total = sum(weights.values())
        if total == 0:
            raise ValueError("Weights cannot all be zero")
        self.weights = {attr: w / total for attr, w in weights.items()}

    def score(self, option):
        return sum((getattr(option, attr) or 0) * weight for attr, weight in self.weights.items())


STRATEGIES = {
    BalancedCarrierScore.name: BalancedCarrierScore,
}


def get_strategy(name='balanced', weights=None):
    if weights:
        return WeightedCarrierScore(weights)
    if not isinstance(name, str) or name not in STRATEGIES:
        raise ValueError(f"Unknown scoring strategy: {name}")
    return STRATEGIES[name]()


def rank(options, strategy=None):
    """Return ``(option, score)`` pairs, best first; ties keep input order"""
    strategy = strategy or BalancedCarrierScore()
    scored = [(option, strategy.score(option)) for option in options]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
