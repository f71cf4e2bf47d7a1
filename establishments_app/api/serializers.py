from rest_framework import serializers

from core.pagination import PageParamsSerializer
from reviews_app.models import Review
from user_auth_app.api.serializers import AuthorSummarySerializer, OwnerSummarySerializer

from ..models import Establishment


class EstablishmentReviewSerializer(serializers.ModelSerializer):
    """A review as embedded in an establishment response, without the establishment block."""
    userId = serializers.UUIDField(source='user_id', read_only=True)
    author = AuthorSummarySerializer(source='user', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'title', 'rating', 'comment', 'userId', 'author', 'createdAt', 'updatedAt']
        read_only_fields = fields


class EstablishmentSerializer(serializers.ModelSerializer):
    """
    Serializes an `Establishment` for every read endpoint.

    Expects the instance to carry `accessibility_score` and `review_count` (see
    `establishments_app.services.with_score`). `distanceKm` is only present when the search
    computed a distance from the caller's coordinates.

    Context:
        review_limit (int | None): How many of the most recent reviews to embed. `None` embeds
            all of them. List endpoints pass 5; the score always uses every review.
    """
    zipCode = serializers.CharField(source='zip_code', read_only=True)
    coverImageUrl = serializers.URLField(source='cover_image_url', read_only=True)
    externalPlaceId = serializers.CharField(source='external_place_id', read_only=True)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)
    owner = OwnerSummarySerializer(read_only=True)
    accessibilityScore = serializers.FloatField(source='accessibility_score', read_only=True)
    reviewCount = serializers.IntegerField(source='review_count', read_only=True)
    reviews = serializers.SerializerMethodField()
    distanceKm = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Establishment
        fields = [
            'id',
            'name',
            'description',
            'phone',
            'category',
            'street',
            'number',
            'neighborhood',
            'city',
            'state',
            'zipCode',
            'latitude',
            'longitude',
            'coverImageUrl',
            'externalPlaceId',
            'ownerId',
            'owner',
            'accessibilityScore',
            'reviewCount',
            'reviews',
            'distanceKm',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields

    def get_reviews(self, obj):
        reviews = list(obj.reviews.all())
        limit = self.context.get('review_limit')
        if limit is not None:
            reviews = reviews[:limit]
        return EstablishmentReviewSerializer(reviews, many=True).data

    def get_distanceKm(self, obj):
        return getattr(obj, 'distance_km', None)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get('distanceKm') is None:
            data.pop('distanceKm', None)
        return data


class EstablishmentWriteSerializer(serializers.ModelSerializer):
    """
    Validates the payload for creating or updating an establishment.

    Field names follow the API's camelCase convention and map onto the model fields through
    `source`. The owner is never taken from the payload. `externalPlaceId` is declared explicitly
    so that a duplicate is reported by the service as a conflict instead of a validation error.
    """
    name = serializers.CharField(min_length=3, max_length=150)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Establishment.Category.choices, required=False)
    street = serializers.CharField(max_length=200, required=False, allow_blank=True)
    number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    neighborhood = serializers.CharField(max_length=100, required=False, allow_blank=True)
    city = serializers.CharField(min_length=2, max_length=100)
    state = serializers.CharField(min_length=2, max_length=2)
    zipCode = serializers.CharField(
        source='zip_code', max_length=10, required=False, allow_blank=True
    )
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
    coverImageUrl = serializers.URLField(
        source='cover_image_url', max_length=500, required=False, allow_null=True, allow_blank=True
    )
    externalPlaceId = serializers.CharField(
        source='external_place_id', max_length=100, required=False, allow_null=True,
        allow_blank=True,
    )

    class Meta:
        model = Establishment
        fields = [
            'name',
            'description',
            'phone',
            'category',
            'street',
            'number',
            'neighborhood',
            'city',
            'state',
            'zipCode',
            'latitude',
            'longitude',
            'coverImageUrl',
            'externalPlaceId',
        ]

    def validate_state(self, value):
        if not value.isalpha():
            raise serializers.ValidationError("State must be a two-letter code.")
        return value.upper()

    def validate_coverImageUrl(self, value):
        return value or None

    def validate_externalPlaceId(self, value):
        value = (value or '').strip()
        return value or None


class EstablishmentSearchSerializer(PageParamsSerializer):
    """
    Validates the query string of `GET /api/establishments/`.

    Inherits `page` and `limit` from the shared pagination parameters. `radius` is accepted and
    range-checked in kilometres but does not restrict the results.
    """
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
    category = serializers.ChoiceField(choices=Establishment.Category.choices, required=False)
    city = serializers.CharField(required=False, allow_blank=True, max_length=100)
    state = serializers.CharField(required=False, min_length=2, max_length=2)
    minRating = serializers.FloatField(source='min_rating', required=False, min_value=1, max_value=5)
    latitude = serializers.FloatField(required=False, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, min_value=-180, max_value=180)
    radius = serializers.FloatField(required=False, min_value=0.1, max_value=50, default=10)

    def validate_state(self, value):
        return value.upper()
