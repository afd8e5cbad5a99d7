from django.conf.urls import include
from django.urls import path
from rest_framework import routers

from .views import (
	ExchangeActionView,
	ExchangeRequestViewSet,
	MessageListCreateView,
	ReviewViewSet,
	mark_messages_read,
	review_statistics_view,
)

exchange_router = routers.DefaultRouter()
exchange_router.register(r"", ExchangeRequestViewSet, basename="exchange")

review_router = routers.DefaultRouter()
review_router.register(r"", ReviewViewSet, basename="review")

urlpatterns = [
	path("exchanges/actions/", ExchangeActionView.as_view(), name="exchange-actions"),
	path("exchanges/<int:pk>/messages/", MessageListCreateView.as_view(), name="exchange-messages"),
	path("exchanges/<int:pk>/messages/read/", mark_messages_read, name="exchange-messages-read"),
	path("exchanges/", include(exchange_router.urls)),
	path("reviews/", include(review_router.urls)),
	path("users/<int:user_id>/review-stats/", review_statistics_view, name="review-stats"),
]
