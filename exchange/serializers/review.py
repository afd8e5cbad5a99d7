from rest_framework import serializers

from core.serializers import SimpleUserSerializer
from exchange.models import Review


class ReviewSerializer(serializers.ModelSerializer):
	author = SimpleUserSerializer(read_only=True)
	subject = SimpleUserSerializer(read_only=True)
	is_editable = serializers.BooleanField(read_only=True)

	class Meta:
		model = Review
		fields = (
			"id",
			"exchange_request",
			"author",
			"subject",
			"rating",
			"comment",
			"is_visible",
			"is_editable",
			"created_at",
			"modified_at",
		)
		read_only_fields = fields


class ReviewWriteSerializer(serializers.Serializer):
	"""Raw review input. Range and length rules are enforced by ``Review.validate``."""

	rating = serializers.IntegerField()
	comment = serializers.CharField(trim_whitespace=False, allow_blank=True)


class ReviewCreateSerializer(ReviewWriteSerializer):
	exchange_request = serializers.IntegerField(min_value=1)
