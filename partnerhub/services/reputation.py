"""Reputation score for a partner, derived from its review history.

The score is always recomputed from the reviews and never stored:

    score = round((average_rating / 5) * 60       # quality
                  + min(1, total_reviews / 10) * 20 # volume, saturates at 10
                  + momentum)                       # 20 up, 10 stable, 0 down

Momentum compares the mean rating of the last 30 days with the 30 days
before that. Differences within +/-0.1 count as stable.
"""

import math
from collections import namedtuple
from datetime import datetime, timedelta

TREND_UP = 'up'
TREND_STABLE = 'stable'
TREND_DOWN = 'down'

TREND_DEAD_BAND = 0.1
TREND_WINDOW = timedelta(days=30)

QUALITY_WEIGHT = 60
VOLUME_WEIGHT = 20
VOLUME_SATURATION = 10
MOMENTUM_POINTS = {TREND_UP: 20, TREND_STABLE: 10, TREND_DOWN: 0}

REPUTATION_LEVELS = (
    (90, 'excellent'),
    (80, 'very_good'),
    (60, 'good'),
)

ReputationStats = namedtuple('ReputationStats', [
    'average_rating',
    'total_reviews',
    'recent_trend',
    'response_rate',
    'reputation_score',
    'level',
    'rating_distribution',
])


def _mean(ratings):
    return sum(ratings) / len(ratings) if ratings else 0


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def trend_between(last_month_avg, previous_month_avg):
    if last_month_avg > previous_month_avg + TREND_DEAD_BAND:
        return TREND_UP
    if last_month_avg < previous_month_avg - TREND_DEAD_BAND:
        return TREND_DOWN
    return TREND_STABLE


def recent_trend(reviews, now=None):
    """Trend of the trailing 30 days against the 30 days before them"""
    now = now or datetime.utcnow()
    last_month_start = now - TREND_WINDOW
    previous_month_start = now - 2 * TREND_WINDOW

    last_month = [r.rating for r in reviews if r.created_at >= last_month_start]
    previous_month = [r.rating for r in reviews
                      if previous_month_start <= r.created_at < last_month_start]
    return trend_between(_mean(last_month), _mean(previous_month))


def reputation_score(average_rating, total_reviews, trend):
    raw = ((average_rating / 5) * QUALITY_WEIGHT
           + min(1, total_reviews / VOLUME_SATURATION) * VOLUME_WEIGHT
           + MOMENTUM_POINTS[trend])
    return max(0, min(100, _round_half_up(raw)))


def reputation_level(score):
    for threshold, level in REPUTATION_LEVELS:
        if score >= threshold:
            return level
    return 'needs_improvement'


def response_rate(reviews):
    """Percentage of reviews the partner has replied to"""
    if not reviews:
        return 0
    replied = sum(1 for r in reviews if r.has_reply)
    return _round_half_up(replied * 100 / len(reviews))


def rating_distribution(reviews):
    """Number of reviews per star, keyed 1 to 5"""
    distribution = {stars: 0 for stars in range(1, 6)}
    for r in reviews:
        if r.rating in distribution:
            distribution[r.rating] += 1
    return distribution


def compute_reputation(reviews, now=None):
    """Build ReputationStats from review records.

    Each review needs ``rating``, ``created_at`` and ``has_reply`` attributes.
    An empty history scores 0 with a stable trend.
    """
    reviews = list(reviews)
    total_reviews = len(reviews)
    average_rating = _mean([r.rating for r in reviews])
    trend = recent_trend(reviews, now) if reviews else TREND_STABLE
    score = reputation_score(average_rating, total_reviews, trend) if reviews else 0

    return ReputationStats(
        average_rating=round(average_rating, 1),
        total_reviews=total_reviews,
        recent_trend=trend,
        response_rate=response_rate(reviews),
        reputation_score=score,
        level=reputation_level(score),
        rating_distribution=rating_distribution(reviews),
    )
