import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Review(models.Model):
    """
    Represents a user's accessibility rating of an establishment.

    A user can review a given establishment only once. The rule is checked by the review service
    before inserting and enforced on the database level by a unique constraint, which settles
    concurrent submissions.

    Attributes:
        establishment (ForeignKey): The reviewed establishment. Deleting it deletes its reviews.
        user (ForeignKey): The author. Deleting the user deletes their reviews.
        title (CharField): Optional headline, up to 100 characters.
        rating (PositiveSmallIntegerField): Star rating from 1 to 5, enforced by validators.
        comment (TextField): Optional free text, up to 2000 characters.
        created_at (DateTimeField): Set once when the review is created.
        updated_at (DateTimeField): Updated on every save.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    establishment = models.ForeignKey(
        'establishments_app.Establishment',
        related_name='reviews',
        on_delete=models.CASCADE,
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='reviews',
        on_delete=models.CASCADE,
    )

    title = models.CharField(max_length=100, blank=True, null=True)

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="The rating given, from 1 to 5."
    )

    comment = models.TextField(max_length=2000, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        # Newest reviews first.
        ordering = ['-created_at']

        constraints = [
            models.UniqueConstraint(
                fields=['user', 'establishment'],
                name='unique_review_per_user_and_establishment',
            ),
        ]

        verbose_name = "Review"
        verbose_name_plural = "Reviews"

    def __str__(self):
        return f"Review by {self.user_id} for {self.establishment_id} ({self.rating} stars)"
