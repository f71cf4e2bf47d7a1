"""
The establishment aggregate store.

Views call these functions instead of touching the ORM directly. Each function takes the
authenticated principal where authorization matters and raises `core.exceptions` errors, which
the API exception handler turns into responses.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Prefetch

from core.exceptions import ConflictError, ForbiddenError, NotFoundError
from core.permissions import ensure_can_mutate
from reviews_app.models import Review

from .models import Establishment
from .scoring import accessibility_score

logger = logging.getLogger(__name__)

CREATOR_ROLES = ('OWNER', 'ADMIN')
EXTERNAL_ID_CONFLICT = 'An establishment with this external place id is already registered.'


def establishment_queryset():
    """
    Base queryset for every establishment read.

    The owner is joined and all reviews (with their authors, newest first) are prefetched, so the
    score and the embedded review list come from a single extra query per page.
    """
    reviews = Review.objects.select_related('user').order_by('-created_at')
    return Establishment.objects.select_related('owner').prefetch_related(
        Prefetch('reviews', queryset=reviews)
    )


def with_score(establishment):
    """Attaches `accessibility_score` and `review_count` computed from the prefetched reviews."""
    ratings = [review.rating for review in establishment.reviews.all()]
    establishment.accessibility_score = accessibility_score(ratings)
    establishment.review_count = len(ratings)
    return establishment


def get_establishment(establishment_id):
    """
    Fetches one establishment with its score attached.

    Raises:
        NotFoundError: If no establishment has this id.
    """
    try:
        establishment = establishment_queryset().get(pk=establishment_id)
    except Establishment.DoesNotExist:
        raise NotFoundError('Establishment not found.')
    return with_score(establishment)


def _external_place_id_taken(external_place_id, exclude_pk=None):
    if not external_place_id:
        return False
    queryset = Establishment.objects.filter(external_place_id=external_place_id)
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    return queryset.exists()


def _save(establishment):
    try:
        with transaction.atomic():
            establishment.save()
    except IntegrityError:
        logger.warning(
            "External place id %s rejected by the unique index", establishment.external_place_id
        )
        raise ConflictError(EXTERNAL_ID_CONFLICT)


def create_establishment(principal, data):
    """
    Registers a new establishment owned by `principal`.

    Args:
        principal: The authenticated user. Must have role OWNER or ADMIN.
        data (dict): Validated model field values.

    Raises:
        ForbiddenError: If the principal may not register establishments.
        ConflictError: If the external place id is already in use, whether found by the lookup
            or by the unique index when a concurrent request won the race.
    """
    if getattr(principal, 'role', None) not in CREATOR_ROLES:
        raise ForbiddenError('Only establishment owners can register establishments.')

    if _external_place_id_taken(data.get('external_place_id')):
        logger.info("Duplicate external place id %s rejected", data.get('external_place_id'))
        raise ConflictError(EXTERNAL_ID_CONFLICT)

    establishment = Establishment(owner=principal, **data)
    _save(establishment)
    logger.info("Establishment %s created by %s", establishment.pk, principal.pk)
    return get_establishment(establishment.pk)


def update_establishment(principal, establishment_id, data):
    """
    Applies a partial update. Only the owner or an ADMIN may change an establishment, and the
    owner itself is never reassigned.
    """
    establishment = get_establishment(establishment_id)
    ensure_can_mutate(
        principal,
        establishment.owner_id,
        'You do not have permission to update this establishment.',
    )

    external_place_id = data.get('external_place_id')
    if external_place_id and _external_place_id_taken(external_place_id, establishment.pk):
        logger.info("Duplicate external place id %s rejected", external_place_id)
        raise ConflictError(EXTERNAL_ID_CONFLICT)

    for field, value in data.items():
        setattr(establishment, field, value)
    _save(establishment)
    logger.info("Establishment %s updated by %s", establishment.pk, principal.pk)
    return get_establishment(establishment.pk)


def delete_establishment(principal, establishment_id):
    """Deletes an establishment and, through the cascade, all of its reviews."""
    establishment = get_establishment(establishment_id)
    ensure_can_mutate(
        principal,
        establishment.owner_id,
        'You do not have permission to delete this establishment.',
    )
    establishment.delete()
    logger.info("Establishment %s deleted by %s", establishment_id, principal.pk)


def list_owned_by(owner_id):
    return establishment_queryset().filter(owner_id=owner_id).order_by('-created_at')
