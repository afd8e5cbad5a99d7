from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.views import APIView

from exchange.models import ExchangeRequest
from exchange.services.authorization import is_participant


class IsExchangeParticipant(BasePermission):
	"""Object-level access to an exchange request for its requester and its owner only."""

	message = "Only participants can access this exchange."

	def has_object_permission(self, request: Request, view: APIView, obj: ExchangeRequest) -> bool:
		return is_participant(obj, request.user)
