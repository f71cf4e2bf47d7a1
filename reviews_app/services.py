"""
The review ledger: creating, changing and removing individual reviews, plus per-establishment
statistics.
"""
import logging

from django.db import IntegrityError, transaction
from django_filters.utils import translate_validation

from core.exceptions import ConflictError, NotFoundError
from core.permissions import ensure_can_mutate
from establishments_app.models import Establishment
from establishments_app.scoring import rating_statistics

from .api.filters import ReviewFilter
from .models import Review

logger = logging.getLogger(__name__)

DUPLICATE_REVIEW = (
    'You have already reviewed this establishment. Use PUT to update your review.'
)
EDITABLE_FIELDS = ('title', 'rating', 'comment')


def review_queryset():
    return Review.objects.select_related('user', 'establishment').order_by('-created_at')


def _has_reviewed(user, establishment_id):
    return Review.objects.filter(user=user, establishment_id=establishment_id).exists()


def get_review(review_id):
    try:
        return review_queryset().get(pk=review_id)
    except Review.DoesNotExist:
        raise NotFoundError('Review not found.')


def create_review(principal, data):
    """
    Records a new review by `principal`.

    The checks run in order: the establishment must exist, the principal must not have reviewed
    it yet, then the insert runs inside a transaction. A concurrent duplicate that slips past the
    lookup is rejected by the unique constraint and reported with the same conflict.

    Args:
        principal: The authenticated author.
        data (dict): `establishment_id`, `rating` and optionally `title` and `comment`.

    Raises:
        NotFoundError: If the establishment does not exist.
        ConflictError: If the principal already reviewed the establishment.
    """
    establishment_id = data['establishment_id']
    if not Establishment.objects.filter(pk=establishment_id).exists():
        raise NotFoundError('Establishment not found.')

    if _has_reviewed(principal, establishment_id):
        logger.info("Duplicate review by %s for %s rejected", principal.pk, establishment_id)
        raise ConflictError(DUPLICATE_REVIEW)

    try:
        with transaction.atomic():
            review = Review.objects.create(
                user=principal,
                establishment_id=establishment_id,
                rating=data['rating'],
                title=data.get('title'),
                comment=data.get('comment'),
            )
    except IntegrityError:
        logger.warning(
            "Concurrent review by %s for %s rejected by the unique constraint",
            principal.pk,
            establishment_id,
        )
        raise ConflictError(DUPLICATE_REVIEW)

    logger.info("Review %s created by %s for %s", review.pk, principal.pk, establishment_id)
    return get_review(review.pk)


def update_review(principal, review_id, data):
    """
    Changes the title, rating or comment of a review. The author and the establishment never
    change. Only the author or an ADMIN may update.
    """
    review = get_review(review_id)
    ensure_can_mutate(principal, review.user_id, 'You can only update your own reviews.')

    for field in EDITABLE_FIELDS:
        if field in data:
            setattr(review, field, data[field])
    review.save()
    logger.info("Review %s updated by %s", review.pk, principal.pk)
    return review


def delete_review(principal, review_id):
    review = get_review(review_id)
    ensure_can_mutate(principal, review.user_id, 'You can only delete your own reviews.')
    review.delete()
    logger.info("Review %s deleted by %s", review_id, principal.pk)


def stats_for(establishment_id):
    """
    Rating statistics for one establishment.

    Returns:
        dict: `{'totalReviews', 'averageRating', 'ratingDistribution'}` as built by
        `establishments_app.scoring.rating_statistics`.

    Raises:
        NotFoundError: If the establishment does not exist.
    """
    if not Establishment.objects.filter(pk=establishment_id).exists():
        raise NotFoundError('Establishment not found.')
    ratings = Review.objects.filter(establishment_id=establishment_id).values_list(
        'rating', flat=True
    )
    return rating_statistics(ratings)


def list_by_user(user_id):
    return review_queryset().filter(user_id=user_id)


def list_reviews(params):
    """
    Filters reviews by `establishmentId`, `userId`, `minRating` and `maxRating` (all optional,
    bounds inclusive), newest first. Pagination is left to the caller.

    Raises:
        rest_framework.exceptions.ValidationError: If a filter value is malformed or out of range.
    """
    filterset = ReviewFilter(data=params, queryset=review_queryset())
    if not filterset.is_valid():
        raise translate_validation(filterset.errors)
    return filterset.qs
