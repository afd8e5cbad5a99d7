"""Audit trail of exchange requests.

Refused and cancelled requests are kept forever, and so is the record of how they got there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models

from exchange.enums.history_events import HistoryEvents

if TYPE_CHECKING:
	from core.models import User
	from exchange.models.exchange_request import ExchangeRequest


class ExchangeHistory(models.Model):
	"""Immutable log entry for one lifecycle event of an exchange request.

	Attributes:
		exchange_request: The exchange request this event belongs to.
		event_type: What happened.
		actor: User who triggered the event (None for system events such as completion).
		message: Human-readable description.
		created_at: When the event occurred.
	"""

	EVENT_TYPE_CHOICES = [(event.value, event.name.replace("_", " ").title()) for event in HistoryEvents]

	exchange_request = models.ForeignKey(
		"exchange.ExchangeRequest",
		on_delete=models.CASCADE,
		related_name="history",
		help_text="The exchange request this event is for",
	)
	event_type = models.CharField(
		max_length=30,
		choices=EVENT_TYPE_CHOICES,
		help_text="Type of event that occurred",
	)
	actor = models.ForeignKey(
		"core.User",
		on_delete=models.SET_NULL,
		null=True,
		blank=True,
		related_name="exchange_actions",
		help_text="User who triggered this event (None for system events)",
	)
	message = models.TextField(
		blank=True,
		help_text="Human-readable description of this event",
	)
	created_at = models.DateTimeField(auto_now_add=True, help_text="When this event occurred")

	class Meta:  # noqa: D106
		ordering = ("created_at", "id")
		verbose_name = "Exchange History"
		verbose_name_plural = "Exchange Histories"
		indexes = [
			models.Index(fields=["exchange_request", "created_at"], name="exchange_history_request_idx"),
			models.Index(fields=["event_type"], name="exchange_history_event_idx"),
		]

	def __str__(self) -> str:
		return f"{self.event_type} by {self.get_actor_display()} at {self.created_at}"

	def __repr__(self) -> str:
		return (
			f"<ExchangeHistory(exchange_request_id={self.exchange_request_id}, "
			f"event={self.event_type}, actor={self.get_actor_display()})>"
		)

	@classmethod
	def create_event(
		cls,
		exchange_request: ExchangeRequest,
		event_type: HistoryEvents | str,
		actor: User | None = None,
		message: str = "",
	) -> ExchangeHistory:
		"""Record a new event.

		Args:
			exchange_request: The exchange request the event is for.
			event_type: Type of event, one of ``HistoryEvents``.
			actor: User who triggered the event, if any.
			message: Description of the event.

		Returns:
			The created ExchangeHistory instance.

		Raises:
			ValueError: If event_type is not valid.
		"""
		valid_types = [event.value for event in HistoryEvents]

		if event_type not in valid_types:
			raise ValueError(f"Invalid event_type '{event_type}'. Must be one of: {', '.join(valid_types)}")

		return cls.objects.create(
			exchange_request=exchange_request,
			event_type=event_type,
			actor=actor,
			message=message,
		)

	@classmethod
	def get_timeline(cls, exchange_request: ExchangeRequest) -> models.QuerySet[ExchangeHistory]:
		"""Get the chronological timeline of an exchange request, oldest first."""  # noqa: DOC201
		return cls.objects.filter(exchange_request=exchange_request).select_related("actor").order_by("created_at", "id")

	def get_actor_display(self) -> str:
		"""Username of the actor, or "System" for automatic events."""  # noqa: DOC201
		return self.actor.username if self.actor else "System"
