from rest_framework import generics

from .models import Notification
from .serializers import NotificationSerializer


class NotificationListView(generics.ListAPIView):
	queryset = Notification.objects.all()
	serializer_class = NotificationSerializer
	filterset_fields = ("is_read", "level", "priority")
	ordering_fields = ("created_at",)

	def get_queryset(self):
		return self.queryset.filter(user=self.request.user).order_by("-created_at")


class NotificationDetailView(generics.RetrieveUpdateDestroyAPIView):
	"""Read, mark as read or dismiss one of the caller's notifications."""

	queryset = Notification.objects.all()
	serializer_class = NotificationSerializer

	def get_queryset(self):
		return self.queryset.filter(user=self.request.user)
