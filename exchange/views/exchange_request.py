from django.db.models import QuerySet
from rest_framework import mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.models import ExchangeRequest, Message
from exchange.permissions import IsExchangeParticipant
from exchange.serializers import ExchangeRequestCreateSerializer, ExchangeRequestSerializer


class ExchangeRequestViewSet(
	mixins.CreateModelMixin,
	mixins.RetrieveModelMixin,
	mixins.ListModelMixin,
	GenericViewSet,
):
	"""
	Exchange requests of the authenticated user.

	Listing returns the requests the user sent or received. The detail of a request, timeline
	included, is reserved to its two participants; anyone else gets a 403 rather than a 404.
	"""

	serializer_class = ExchangeRequestSerializer
	permission_classes = (IsAuthenticated, IsExchangeParticipant)
	filterset_fields = ("status", "target_kind")
	ordering_fields = ("created_at", "proposed_at")

	def get_queryset(self) -> QuerySet[ExchangeRequest]:
		queryset = ExchangeRequest.objects.select_related("requester", "owner", "item", "skill")

		if self.action == "list":
			role = self.request.query_params.get("role")

			if role == "sent":
				return queryset.sent_by(self.request.user)

			if role == "received":
				return queryset.received_by(self.request.user)

			return queryset.involving(self.request.user)

		return queryset

	def create(self, request: Request, *args, **kwargs) -> Response:
		"""Open a pending exchange request on an item or a skill."""
		payload = ExchangeRequestCreateSerializer(data=request.data)
		payload.is_valid(raise_exception=True)

		exchange_request = ExchangeRequest.create_request(
			requester=request.user,
			target=payload.get_target(),
			proposal=payload.validated_data["proposal"],
			message=payload.validated_data["message"],
			proposed_at=payload.validated_data["proposed_at"],
		)

		return Response(ExchangeRequestSerializer(exchange_request).data, status=status.HTTP_201_CREATED)

	@action(detail=False, methods=["get"])
	def summary(self, request: Request) -> Response:
		"""Counters for the user's exchange dashboard."""
		user = request.user

		return Response({
			"pending_received": ExchangeRequest.objects.pending_count_for(user),
			"sent": ExchangeRequest.objects.count_sent(user),
			"received": ExchangeRequest.objects.count_received(user),
			"accepted_sent": ExchangeRequest.objects.count_sent(user, ExchangeStatuses.ACCEPTED),
			"accepted_received": ExchangeRequest.objects.count_received(user, ExchangeStatuses.ACCEPTED),
			"active": ExchangeRequest.objects.active_for(user).count(),
			"completed": ExchangeRequest.objects.finished_for(user).count(),
			"unread_messages": Message.objects.unread_count_for(user),
		})
