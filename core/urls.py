from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from . import views

urlpatterns = [
	# Auth endpoints
	path("auth/login/", TokenObtainPairView.as_view(), name="token-obtain"),
	path("auth/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
	# Notification endpoints
	path("notifications/", views.NotificationListView.as_view(), name="notification-list"),
	path("notifications/<int:pk>/", views.NotificationDetailView.as_view(), name="notification-detail"),
]
