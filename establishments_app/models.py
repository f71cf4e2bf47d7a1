import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Establishment(models.Model):
    """
    A place that users rate for accessibility, such as a restaurant, pharmacy or store.

    Each establishment belongs to exactly one owner and collects reviews through the
    `Review.establishment` relation (`establishment.reviews`). Its accessibility score is never
    stored; `establishments_app.scoring` derives it from the live review set on every read.

    Attributes:
        owner (ForeignKey): The user (role OWNER or ADMIN) who registered the establishment.
            Deleting the user deletes their establishments.
        category (CharField): One of the `Category` choices, OTHER by default.
        state (CharField): Two-letter state code, always stored in upper case.
        latitude (FloatField): Decimal degrees in [-90, 90].
        longitude (FloatField): Decimal degrees in [-180, 180].
        external_place_id (CharField): Optional identifier issued by a mapping provider. At most
            one establishment may carry a given value; the unique index is the authority.
    """
    class Category(models.TextChoices):
        RESTAURANT = 'RESTAURANT', 'Restaurant'
        CAFE = 'CAFE', 'Cafe'
        STORE = 'STORE', 'Store'
        HOTEL = 'HOTEL', 'Hotel'
        SERVICE = 'SERVICE', 'Service'
        LEISURE = 'LEISURE', 'Leisure'
        HEALTH = 'HEALTH', 'Health'
        OTHER = 'OTHER', 'Other'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='establishments',
        on_delete=models.CASCADE,
    )
    name = models.CharField(max_length=150)
    description = models.TextField(max_length=1000, blank=True, default='')
    phone = models.CharField(max_length=20, blank=True, default='')
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)

    street = models.CharField(max_length=200, blank=True, default='')
    number = models.CharField(max_length=20, blank=True, default='')
    neighborhood = models.CharField(max_length=100, blank=True, default='')
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2)
    zip_code = models.CharField(max_length=10, blank=True, default='')

    latitude = models.FloatField(validators=[MinValueValidator(-90), MaxValueValidator(90)])
    longitude = models.FloatField(validators=[MinValueValidator(-180), MaxValueValidator(180)])

    cover_image_url = models.URLField(max_length=500, blank=True, null=True)
    external_place_id = models.CharField(max_length=100, unique=True, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Establishment"
        verbose_name_plural = "Establishments"
        indexes = [
            models.Index(fields=['city'], name='establishment_city_idx'),
            models.Index(fields=['category'], name='establishment_category_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.city}/{self.state})"

    def save(self, *args, **kwargs):
        if self.state:
            self.state = self.state.upper()
        # An empty identifier would collide with every other empty one under the unique index.
        if not self.external_place_id:
            self.external_place_id = None
        super().save(*args, **kwargs)
