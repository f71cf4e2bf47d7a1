from rest_framework import serializers

from user_auth_app.api.serializers import AuthorSummarySerializer

from ..models import Review


class ReviewEstablishmentSerializer(serializers.Serializer):
    """The establishment block embedded in review responses."""
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    category = serializers.CharField(read_only=True)


class ReviewReadSerializer(serializers.ModelSerializer):
    """
    Serializer for the `Review` model, intended for read-only operations.

    Used for list and detail responses and as the response body after a create or update.
    Besides the raw foreign keys it embeds short summaries of the author and the establishment,
    so a client can render a review without further requests.
    """
    establishmentId = serializers.UUIDField(source='establishment_id', read_only=True)
    userId = serializers.UUIDField(source='user_id', read_only=True)
    author = AuthorSummarySerializer(source='user', read_only=True)
    establishment = ReviewEstablishmentSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'title',
            'rating',
            'comment',
            'establishmentId',
            'userId',
            'author',
            'establishment',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """
    Validates the payload for submitting a review.

    The author is never part of the payload; it is always the authenticated user. Whether the
    establishment exists and whether the author already reviewed it are checked by the review
    service, which answers 404 and 409 respectively.
    """
    establishmentId = serializers.UUIDField(source='establishment_id')
    title = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(
        max_length=2000, required=False, allow_null=True, allow_blank=True
    )


class ReviewUpdateSerializer(serializers.Serializer):
    """
    Handles updating an existing review.

    Limited to the fields that may change after creation: the author and the establishment of a
    review are immutable. All fields are optional.
    """
    title = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(
        max_length=2000, required=False, allow_null=True, allow_blank=True
    )
