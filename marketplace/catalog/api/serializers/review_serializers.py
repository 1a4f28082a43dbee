from rest_framework import serializers

from marketplace.catalog.domain.models.interaction import Review


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.name", read_only=True)

    class Meta:
        model = Review
        fields = ["id", "user_id", "user_name", "review_type", "item_id", "rating", "comment", "created_at"]
        read_only_fields = fields


class ReviewRequestSerializer(serializers.Serializer):
    rating = serializers.IntegerField(
        min_value=1,
        max_value=5,
        error_messages={
            "min_value": "Rating must be 1-5",
            "max_value": "Rating must be 1-5",
            "invalid": "Rating must be 1-5",
            "required": "Rating must be 1-5",
        },
    )
    comment = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=True)
