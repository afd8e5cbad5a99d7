from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models
from django.db.models import F, Q

from swapmeet.settings import EXCHANGE_SETTINGS

if TYPE_CHECKING:
	from core.models import User


class MessageQuerySet(models.QuerySet):
	def unread_for(self, user: User) -> MessageQuerySet:
		return self.filter(recipient=user, is_read=False)

	def unread_count_for(self, user: User) -> int:
		"""Number of unread messages addressed to the user, across all exchanges."""  # noqa: DOC201
		return self.unread_for(user).count()


class Message(models.Model):
	"""A message exchanged between the two participants of an accepted exchange request.

	Messages are only ever created through ``ExchangeRequest.send_message``, which enforces
	the status gate. They are never deleted, so the conversation stays readable after the
	exchange ends.
	"""

	exchange_request = models.ForeignKey(
		"exchange.ExchangeRequest",
		on_delete=models.CASCADE,
		related_name="messages",
	)
	sender = models.ForeignKey("core.User", on_delete=models.CASCADE, related_name="sent_messages")
	recipient = models.ForeignKey("core.User", on_delete=models.CASCADE, related_name="received_messages")
	content = models.TextField(max_length=EXCHANGE_SETTINGS.MESSAGE_MAX_LENGTH)
	is_read = models.BooleanField(default=False)
	sent_at = models.DateTimeField(auto_now_add=True)

	objects = MessageQuerySet.as_manager()

	class Meta:  # noqa: D106
		ordering = ("sent_at", "id")
		indexes = [
			models.Index(fields=["exchange_request", "sent_at"], name="message_request_sent_idx"),
			models.Index(fields=["recipient", "is_read"], name="message_recipient_read_idx"),
		]
		constraints = [
			models.CheckConstraint(condition=~Q(content=""), name="message_content_not_empty"),
			models.CheckConstraint(condition=~Q(sender=F("recipient")), name="message_distinct_parties"),
		]

	def __str__(self) -> str:
		return f"Message from {self.sender} to {self.recipient} on exchange #{self.exchange_request_id}"

	def mark_read(self) -> None:
		if self.is_read:
			return

		self.is_read = True
		self.save(update_fields=["is_read"])
