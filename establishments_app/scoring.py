"""
Rating aggregates derived from an establishment's reviews.

Everything here is a pure function over a sequence of integer ratings. Scores are never stored,
so callers pass the live ratings fetched for the current request.
"""
from decimal import ROUND_HALF_UP, Decimal

RATING_VALUES = (1, 2, 3, 4, 5)
ONE_DECIMAL = Decimal('0.1')


def mean_rating(ratings):
    """Returns the arithmetic mean of `ratings`, or None when there are none."""
    ratings = list(ratings)
    if not ratings:
        return None
    return float(Decimal(sum(ratings)) / Decimal(len(ratings)))


def accessibility_score(ratings):
    """
    The accessibility score of an establishment.

    Args:
        ratings (iterable of int): Every review rating of the establishment.

    Returns:
        float | None: The mean rounded half-up to one decimal, or None with zero reviews.
    """
    ratings = list(ratings)
    if not ratings:
        return None
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def rating_statistics(ratings):
    """
    Summarizes a review set for the statistics endpoint.

    Returns:
        dict: `{'totalReviews', 'averageRating', 'ratingDistribution'}`. The average is rounded
        like the accessibility score but is 0 for an empty set, and the distribution always has
        a bucket for each of the five rating values.
    """
    ratings = list(ratings)
    distribution = {value: 0 for value in RATING_VALUES}
    for rating in ratings:
        distribution[rating] += 1

    score = accessibility_score(ratings)
    return {
        'totalReviews': len(ratings),
        'averageRating': score if score is not None else 0,
        'ratingDistribution': distribution,
    }
