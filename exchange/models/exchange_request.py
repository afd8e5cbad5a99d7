"""Exchange requests between members.

An exchange request targets exactly one offer (an item or a skill) and moves through:

	pending → accepted → completed
	   └→ refused
	   └→ cancelled

Only the owner of the offer accepts or refuses; only the requester cancels. Completion is never
requested by anyone: it happens inside the transaction that stores the second review.
Every mutation re-reads the row with ``SELECT ... FOR UPDATE`` before checking the status, so
concurrent calls on the same request queue up and the losers see the new status.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from django.db import models, transaction
from django.db.models import F, Q
from django.utils import timezone

from core.models import Notification
from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.enums.history_events import HistoryEvents
from exchange.exceptions import InvalidRequest, InvalidState, InvalidTransition, NotFound, Unauthorized, ValidationError
from exchange.models.exchange_history import ExchangeHistory
from exchange.services.authorization import (
	is_participant,
	other_participant,
	require_owner,
	require_participant,
	require_requester,
)
from exchange.types.target import ItemTarget, SkillTarget, Target, make_target
from exchange.types.timeline import TimelineEntry
from listings import registry
from listings.enums.offer_kinds import OfferKinds
from swapmeet.settings import EXCHANGE_SETTINGS

if TYPE_CHECKING:
	from core.models import User
	from exchange.models.message import Message
	from listings.models.offer import Offer

logger = logging.getLogger(__name__)


class ExchangeRequestQuerySet(models.QuerySet):
	"""Read-side queries over exchange requests."""

	def involving(self, user: User) -> ExchangeRequestQuerySet:
		return self.filter(Q(requester=user) | Q(owner=user))

	def sent_by(self, user: User) -> ExchangeRequestQuerySet:
		return self.filter(requester=user)

	def received_by(self, user: User) -> ExchangeRequestQuerySet:
		return self.filter(owner=user)

	def with_status(self, status: ExchangeStatuses | str) -> ExchangeRequestQuerySet:
		return self.filter(status=status)

	def active_for(self, user: User) -> ExchangeRequestQuerySet:
		"""Accepted exchanges the user takes part in, where messaging is open."""
		return self.involving(user).with_status(ExchangeStatuses.ACCEPTED)

	def finished_for(self, user: User) -> ExchangeRequestQuerySet:
		"""Completed exchanges the user takes part in."""
		return self.involving(user).with_status(ExchangeStatuses.COMPLETED)

	def pending_count_for(self, user: User) -> int:
		"""Number of requests waiting for the user's answer."""
		return self.received_by(user).with_status(ExchangeStatuses.PENDING).count()

	def count_received(self, user: User, status: ExchangeStatuses | str | None = None) -> int:
		queryset = self.received_by(user)
		return (queryset.with_status(status) if status else queryset).count()

	def count_sent(self, user: User, status: ExchangeStatuses | str | None = None) -> int:
		queryset = self.sent_by(user)
		return (queryset.with_status(status) if status else queryset).count()


class ExchangeRequest(models.Model):
	"""A member's request to obtain another member's item or skill.

	Attributes:
		requester: Member asking for the offer.
		owner: Member owning the offer, who answers the request.
		target_kind: Whether ``item`` or ``skill`` is set; exactly one of them is.
		proposal: What the requester offers in return.
		message: Message accompanying the request.
		proposed_at: When the requester proposes to meet; in the future at creation.
		status: Current status, see ``ExchangeStatuses``.
		created_at: When the request was made.
		updated_at: Last modification, bumped on every status change.
	"""

	STATUS_CHOICES = [(status.value, status.name.title()) for status in ExchangeStatuses]
	TARGET_KIND_CHOICES = [(kind.value, kind.name.title()) for kind in OfferKinds]

	requester = models.ForeignKey(
		"core.User",
		on_delete=models.CASCADE,
		related_name="sent_exchange_requests",
		help_text="Member who made the request",
	)
	owner = models.ForeignKey(
		"core.User",
		on_delete=models.CASCADE,
		related_name="received_exchange_requests",
		help_text="Owner of the requested offer",
	)
	target_kind = models.CharField(max_length=10, choices=TARGET_KIND_CHOICES)
	item = models.ForeignKey(
		"listings.Item",
		on_delete=models.PROTECT,
		null=True,
		blank=True,
		related_name="exchange_requests",
	)
	skill = models.ForeignKey(
		"listings.Skill",
		on_delete=models.PROTECT,
		null=True,
		blank=True,
		related_name="exchange_requests",
	)

	proposal = models.CharField(
		max_length=EXCHANGE_SETTINGS.PROPOSAL_MAX_LENGTH,
		help_text="What the requester offers in return",
	)
	message = models.TextField(
		max_length=EXCHANGE_SETTINGS.MESSAGE_MAX_LENGTH,
		help_text="Message accompanying the request",
	)
	proposed_at = models.DateTimeField(help_text="Proposed date and time for the exchange")

	status = models.CharField(
		max_length=20,
		choices=STATUS_CHOICES,
		default=ExchangeStatuses.PENDING.value,
		help_text="Current status of the exchange request",
	)

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	objects = ExchangeRequestQuerySet.as_manager()

	class Meta:  # noqa: D106
		ordering = ("-created_at",)
		indexes = [
			models.Index(fields=["requester", "status"], name="exchange_requester_status_idx"),
			models.Index(fields=["owner", "status"], name="exchange_owner_status_idx"),
			models.Index(fields=["-created_at"], name="exchange_created_idx"),
		]
		constraints = [
			models.CheckConstraint(
				condition=(
					Q(target_kind=OfferKinds.ITEM.value, item__isnull=False, skill__isnull=True)
					| Q(target_kind=OfferKinds.SKILL.value, skill__isnull=False, item__isnull=True)
				),
				name="exchange_request_single_target",
			),
			models.CheckConstraint(
				condition=~Q(requester=F("owner")),
				name="exchange_request_distinct_parties",
			),
		]

	def __str__(self) -> str:
		return f"Exchange request #{self.pk} by {self.requester} for {self.offer} ({self.status})"

	# Creation

	@classmethod
	@transaction.atomic
	def create_request(
		cls,
		requester: User,
		target: Target,
		proposal: str,
		message: str,
		proposed_at: datetime,
	) -> ExchangeRequest:
		"""Open a new pending exchange request on an item or a skill.

		The targeted offer is row-locked while its availability and owner are checked.

		Args:
			requester: Member making the request.
			target: The item or skill being requested.
			proposal: What the requester offers in return.
			message: Message for the owner.
			proposed_at: Proposed date and time for the exchange, strictly in the future.

		Raises:
			Unauthorized: If there is no authenticated requester.
			ValidationError: If a field is missing or invalid.
			NotFound: If the targeted offer does not exist.
			InvalidRequest: If the offer is unavailable or belongs to the requester.

		Returns:
			ExchangeRequest: The new pending request.
		"""
		if requester is None or not getattr(requester, "is_authenticated", False):
			raise Unauthorized("You must be signed in to request an exchange.")

		if not isinstance(target, ItemTarget | SkillTarget):
			raise ValidationError("An item or a skill must be specified.")

		proposal = cls._clean_text(proposal, "counter-proposal", EXCHANGE_SETTINGS.PROPOSAL_MAX_LENGTH)
		message = cls._clean_text(message, "message", EXCHANGE_SETTINGS.MESSAGE_MAX_LENGTH)

		if proposed_at is None:
			raise ValidationError("The proposed date is required.")

		if timezone.is_naive(proposed_at):
			proposed_at = timezone.make_aware(proposed_at)

		if proposed_at <= timezone.now():
			raise ValidationError("The proposed date must be in the future.")

		try:
			offer = registry.find_by_id(target.kind, target.ref, lock=True)

		except registry.OfferNotFound as e:
			raise NotFound(f"The requested {target.kind} does not exist.") from e

		if not offer.available:
			raise InvalidRequest(f"This {target.kind} is not available.")

		if offer.owner_id == requester.pk:
			raise InvalidRequest(f"You cannot request your own {target.kind}.")

		exchange_request = cls.objects.create(
			requester=requester,
			owner=offer.owner,
			target_kind=target.kind,
			item=offer if target.kind == OfferKinds.ITEM else None,
			skill=offer if target.kind == OfferKinds.SKILL else None,
			proposal=proposal,
			message=message,
			proposed_at=proposed_at,
		)

		exchange_request._log_event(HistoryEvents.CREATED, requester, f"{requester} requested {offer.title}.")
		Notification.notify(
			[exchange_request.owner],
			f"{requester.display_name} would like to exchange for your {target.kind} \"{offer.title}\".",
			redirect_to=exchange_request.redirect_path,
		)
		logger.debug(f"Exchange request {exchange_request.pk} created by user {requester.pk} on {target}")

		return exchange_request

	@staticmethod
	def _clean_text(value: str | None, label: str, max_length: int) -> str:
		value = (value or "").strip()

		if not value:
			raise ValidationError(f"The {label} is required.")

		if len(value) > max_length:
			raise ValidationError(f"The {label} cannot exceed {max_length} characters.")

		return value

	@classmethod
	def fetch(cls, pk: int, *, lock: bool = False) -> ExchangeRequest:
		"""
		Get an exchange request by id.

		Args:
			pk: Primary key of the request.
			lock: Row-lock the request for the rest of the current transaction.

		Raises:
			NotFound: If no such request exists.

		Returns:
			ExchangeRequest: The request, with both participants loaded.
		"""
		queryset = cls.objects.select_related("requester", "owner")

		if lock:
			queryset = queryset.select_for_update(of=("self",))

		try:
			return queryset.get(pk=pk)

		except cls.DoesNotExist as e:
			raise NotFound("Exchange request not found.") from e

	# State machine

	def perform_action(self, action: str, user: User) -> ExchangeRequest:
		"""
		Route a participant's action to the matching transition.

		Args:
			action: One of "accept", "refuse" or "cancel".
			user: The user performing the action.

		Raises:
			ValidationError: If the action is unknown.

		Returns:
			ExchangeRequest: The updated request.
		"""
		action_method_map = {
			"accept": self.accept,
			"refuse": self.refuse,
			"cancel": self.cancel,
		}

		if action not in action_method_map:
			raise ValidationError(f"Invalid action: {action}")

		return action_method_map[action](user)

	@transaction.atomic
	def accept(self, user: User) -> ExchangeRequest:
		"""
		Accept the request and take the offer off the market.

		Args:
			user: Must be the owner of the offer.

		Raises:
			Unauthorized: If the user is not the owner.
			InvalidTransition: If the request is no longer pending.
			InvalidRequest: If the offer was meanwhile committed to another exchange.

		Returns:
			ExchangeRequest: The accepted request.
		"""
		require_owner(self, user, "accept")
		self._lock()
		self._check_transition(ExchangeStatuses.ACCEPTED)

		offer = registry.find_by_id(self.target_kind, self.target.ref, lock=True)

		if not offer.available:
			raise InvalidRequest(f"This {self.target_kind} is already committed to another exchange.")

		registry.set_available(offer, False)
		self.status = ExchangeStatuses.ACCEPTED.value
		self.save(update_fields=["status", "updated_at"])

		self._log_event(HistoryEvents.ACCEPTED, user, f"{user} accepted the exchange.")
		Notification.notify(
			[self.requester],
			f"{user.display_name} accepted your exchange request for \"{offer.title}\".",
			level="success",
			redirect_to=self.redirect_path,
		)
		logger.debug(f"Exchange request {self.pk} accepted, {self.target_kind} {offer.pk} locked")

		return self

	@transaction.atomic
	def refuse(self, user: User) -> ExchangeRequest:
		"""
		Refuse the request. The offer stays available.

		Args:
			user: Must be the owner of the offer.

		Raises:
			Unauthorized: If the user is not the owner.
			InvalidTransition: If the request is no longer pending.

		Returns:
			ExchangeRequest: The refused request.
		"""
		require_owner(self, user, "refuse")
		self._lock()
		self._transition_to(ExchangeStatuses.REFUSED)
		self.save(update_fields=["status", "updated_at"])

		self._log_event(HistoryEvents.REFUSED, user, f"{user} refused the exchange.")
		Notification.notify(
			[self.requester],
			f"{user.display_name} declined your exchange request for \"{self.offer.title}\".",
			redirect_to=self.redirect_path,
		)
		logger.debug(f"Exchange request {self.pk} refused")

		return self

	@transaction.atomic
	def cancel(self, user: User) -> ExchangeRequest:
		"""
		Withdraw the request before the owner answered.

		Args:
			user: Must be the requester.

		Raises:
			Unauthorized: If the user is not the requester.
			InvalidTransition: If the request is no longer pending.

		Returns:
			ExchangeRequest: The cancelled request.
		"""
		require_requester(self, user, "cancel")
		self._lock()
		self._transition_to(ExchangeStatuses.CANCELLED)
		self.save(update_fields=["status", "updated_at"])

		self._log_event(HistoryEvents.CANCELLED, user, f"{user} cancelled the exchange request.")
		Notification.notify(
			[self.owner],
			f"{user.display_name} withdrew their request for \"{self.offer.title}\".",
			redirect_to=self.redirect_path,
		)
		logger.debug(f"Exchange request {self.pk} cancelled")

		return self

	def reconcile_completion(self) -> bool:
		"""Complete the exchange if both participants have now reviewed it.

		Must run inside the transaction that stored the review, with this row locked
		(see ``Review.submit``), so the count and the status change cannot interleave with
		the other participant's submission. Hidden reviews still count.

		Returns:
			bool: True if this call moved the request to completed.
		"""
		if self.status != ExchangeStatuses.ACCEPTED:
			return False

		if self.reviews.count() != EXCHANGE_SETTINGS.REVIEWS_TO_COMPLETE:
			return False

		self._transition_to(ExchangeStatuses.COMPLETED)
		self.save(update_fields=["status", "updated_at"])

		self._log_event(HistoryEvents.COMPLETED, None, "Both participants reviewed each other.")
		Notification.notify(
			[self.requester, self.owner],
			f"Your exchange for \"{self.offer.title}\" is complete. Thanks for reviewing!",
			level="success",
			redirect_to=self.redirect_path,
		)
		logger.info(f"Exchange request {self.pk} completed")

		return True

	def _lock(self) -> None:
		"""Re-read the status under a row lock held until the end of the transaction."""
		self.status = type(self).objects.select_for_update().values_list("status", flat=True).get(pk=self.pk)

	def _check_transition(self, status: ExchangeStatuses) -> None:
		current = ExchangeStatuses(self.status)

		if not current.can_transition_to(status):
			raise InvalidTransition(f"An exchange request cannot go from {current} to {status}.")

	def _transition_to(self, status: ExchangeStatuses) -> None:
		self._check_transition(status)
		self.status = status.value

	# Messaging

	@transaction.atomic
	def send_message(self, sender: User, content: str) -> Message:
		"""
		Post a message to the other participant.

		Messaging is only open while the request is accepted.

		Args:
			sender: A participant of the exchange.
			content: Message text, non-blank.

		Raises:
			Unauthorized: If the sender is not a participant.
			InvalidState: If the request is not accepted.
			ValidationError: If the content is blank or too long.

		Returns:
			Message: The stored, unread message.
		"""
		require_participant(self, sender, "send messages in")
		self._lock()

		if self.status != ExchangeStatuses.ACCEPTED:
			raise InvalidState("Messages can only be sent while the exchange is accepted.")

		content = self._clean_text(content, "message content", EXCHANGE_SETTINGS.MESSAGE_MAX_LENGTH)
		recipient = other_participant(self, sender)
		message = self.messages.create(sender=sender, recipient=recipient, content=content)

		Notification.notify(
			[recipient],
			f"New message from {sender.display_name}.",
			redirect_to=self.redirect_path,
		)
		logger.debug(f"Message {message.pk} sent in exchange request {self.pk}")

		return message

	def message_history(self, user: User) -> models.QuerySet[Message]:
		"""
		Get the full conversation, oldest first, whatever the status.

		Raises:
			Unauthorized: If the user is not a participant.
		"""  # noqa: DOC201
		require_participant(self, user, "read messages of")
		return self.messages.select_related("sender", "recipient").order_by("sent_at", "id")

	def unread_messages_for(self, user: User) -> models.QuerySet[Message]:
		return self.messages.filter(recipient=user, is_read=False).order_by("sent_at", "id")

	def mark_messages_read(self, user: User) -> int:
		"""
		Mark every message addressed to the user as read.

		Raises:
			Unauthorized: If the user is not a participant.

		Returns:
			int: Number of messages that were unread.
		"""
		require_participant(self, user, "read messages of")
		return self.messages.filter(recipient=user, is_read=False).update(is_read=True)

	def can_send_message(self, user: User) -> bool:
		return is_participant(self, user) and self.status == ExchangeStatuses.ACCEPTED

	def can_view_history(self, user: User) -> bool:
		return is_participant(self, user)

	# Helpers

	def _log_event(self, event_type: HistoryEvents, actor: User | None, message: str) -> None:
		ExchangeHistory.create_event(exchange_request=self, event_type=event_type, actor=actor, message=message)

	@property
	def target(self) -> Target:
		"""The requested offer as a tagged reference."""
		ref = self.item_id if self.target_kind == OfferKinds.ITEM else self.skill_id
		return make_target(self.target_kind, ref)

	@property
	def offer(self) -> Offer:
		"""The requested item or skill."""
		return self.item if self.target_kind == OfferKinds.ITEM else self.skill

	@property
	def redirect_path(self) -> str:
		return f"/exchanges/{self.pk}/"

	@property
	def timeline(self) -> list[TimelineEntry]:
		"""
		The timeline of the exchange request.

		Returns:
			list[TimelineEntry]: Lifecycle events, oldest first.
		"""
		return [
			TimelineEntry(
				event=HistoryEvents(entry.event_type),
				timestamp=entry.created_at,
				actor=entry.actor,
				description=entry.message,
			)
			for entry in ExchangeHistory.get_timeline(self)
		]
