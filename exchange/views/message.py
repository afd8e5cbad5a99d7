from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from exchange.models import ExchangeRequest
from exchange.serializers import MessageCreateSerializer, MessageSerializer


class MessageListCreateView(APIView):
	"""Conversation of an exchange request: readable in any status, writable while accepted."""

	permission_classes = (IsAuthenticated,)

	def get(self, request: Request, pk: int) -> Response:
		messages = ExchangeRequest.fetch(pk).message_history(request.user)
		return Response(MessageSerializer(messages, many=True).data)

	def post(self, request: Request, pk: int) -> Response:
		payload = MessageCreateSerializer(data=request.data)
		payload.is_valid(raise_exception=True)

		message = ExchangeRequest.fetch(pk).send_message(request.user, payload.validated_data["content"])

		return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


@api_view(["POST"])
def mark_messages_read(request, pk):
	"""Mark every message of the exchange addressed to the caller as read"""
	updated = ExchangeRequest.fetch(pk).mark_messages_read(request.user)
	return Response({"marked_read": updated})
