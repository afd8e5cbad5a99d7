from rest_framework import serializers

from core.serializers import SimpleUserSerializer
from exchange.models import Message
from swapmeet.settings import EXCHANGE_SETTINGS


class MessageSerializer(serializers.ModelSerializer):
	sender = SimpleUserSerializer(read_only=True)
	recipient = SimpleUserSerializer(read_only=True)

	class Meta:
		model = Message
		fields = ("id", "exchange_request", "sender", "recipient", "content", "is_read", "sent_at")
		read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
	content = serializers.CharField(max_length=EXCHANGE_SETTINGS.MESSAGE_MAX_LENGTH, trim_whitespace=False, allow_blank=True)
