from rest_framework import serializers

from .models import Notification, User


class SimpleUserSerializer(serializers.ModelSerializer):
	display_name = serializers.CharField(read_only=True, help_text="Full name, or username when empty")

	class Meta:
		model = User
		fields = ("id", "username", "display_name", "city")
		read_only_fields = fields


class NotificationSerializer(serializers.ModelSerializer):
	class Meta:
		model = Notification
		fields = "__all__"
		read_only_fields = ["id", "user", "message", "level", "priority", "redirect_to", "created_at", "updated_at"]
