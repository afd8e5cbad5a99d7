from rest_framework import exceptions, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from exchange.models import ExchangeRequest
from exchange.serializers import ExchangeRequestSerializer


class ExchangeActionView(APIView):
	"""View to answer or withdraw an exchange request: accept, refuse or cancel."""

	permission_classes = (IsAuthenticated,)

	def post(self, request: Request, *args, **kwargs) -> Response:
		action = request.data.get("action")
		exchange_id = request.data.get("exchange_id")

		if not action or not exchange_id:
			raise exceptions.ParseError("Action and exchange_id are required.")

		if not str(exchange_id).isdigit():
			raise exceptions.ParseError("exchange_id must be an integer.")

		exchange_request = ExchangeRequest.fetch(exchange_id).perform_action(str(action).lower(), request.user)

		return Response(ExchangeRequestSerializer(exchange_request).data, status=status.HTTP_200_OK)
