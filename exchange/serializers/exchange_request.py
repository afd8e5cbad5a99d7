from rest_framework import serializers

from core.serializers import SimpleUserSerializer
from exchange.models import ExchangeRequest
from exchange.types.target import Target, make_target
from listings.enums.offer_kinds import OfferKinds
from swapmeet.settings import EXCHANGE_SETTINGS


class OfferSummarySerializer(serializers.Serializer):
	id = serializers.IntegerField(read_only=True)
	title = serializers.CharField(read_only=True)
	available = serializers.BooleanField(read_only=True)


class ExchangeRequestSerializer(serializers.ModelSerializer):
	requester = SimpleUserSerializer(read_only=True)
	owner = SimpleUserSerializer(read_only=True)
	offer = OfferSummarySerializer(read_only=True)
	timeline = serializers.SerializerMethodField()

	@staticmethod
	def get_timeline(obj: ExchangeRequest) -> list[dict]:
		"""
		Get the lifecycle events of the exchange request.

		Args:
			obj (ExchangeRequest): The exchange request instance.

		Returns:
			list[dict]: Events oldest first, with the actor serialized.
		"""
		return [
			{
				**entry,
				"actor": SimpleUserSerializer(entry["actor"]).data if entry["actor"] is not None else None,
			}
			for entry in obj.timeline
		]

	class Meta:
		model = ExchangeRequest
		fields = (
			"id",
			"requester",
			"owner",
			"target_kind",
			"offer",
			"proposal",
			"message",
			"proposed_at",
			"status",
			"created_at",
			"updated_at",
			"timeline",
		)
		read_only_fields = fields


class ExchangeRequestCreateSerializer(serializers.Serializer):
	"""Payload of a new exchange request. Business rules are checked by ``ExchangeRequest.create_request``."""

	target_kind = serializers.ChoiceField(choices=[kind.value for kind in OfferKinds])
	target_id = serializers.IntegerField(min_value=1)
	proposal = serializers.CharField(max_length=EXCHANGE_SETTINGS.PROPOSAL_MAX_LENGTH)
	message = serializers.CharField(max_length=EXCHANGE_SETTINGS.MESSAGE_MAX_LENGTH)
	proposed_at = serializers.DateTimeField()

	def get_target(self) -> Target:
		return make_target(self.validated_data["target_kind"], self.validated_data["target_id"])
