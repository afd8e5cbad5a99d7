"""Reviews participants leave each other once an exchange took place.

Each participant reviews the other at most once per exchange request. Storing the second review
completes the exchange, in the same transaction as the insert.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import IntegrityError, models, transaction
from django.db.models import Avg, Count, F, Q
from django.utils import timezone

from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.enums.history_events import HistoryEvents
from exchange.exceptions import DuplicateReview, EditWindowExpired, InvalidState, ValidationError
from exchange.models.exchange_history import ExchangeHistory
from exchange.models.exchange_request import ExchangeRequest
from exchange.services.authorization import (
	is_participant,
	other_participant,
	require_participant,
	require_review_author,
	require_review_party,
)
from exchange.types.statistics import ReviewStatistics
from swapmeet.common.util import round_half_up
from swapmeet.settings import EXCHANGE_SETTINGS

if TYPE_CHECKING:
	from core.models import User

logger = logging.getLogger(__name__)

RATING_RANGE = range(EXCHANGE_SETTINGS.MIN_RATING, EXCHANGE_SETTINGS.MAX_RATING + 1)


class ReviewQuerySet(models.QuerySet):
	def visible(self) -> ReviewQuerySet:
		return self.filter(is_visible=True)

	def received_by(self, user: User) -> ReviewQuerySet:
		"""Visible reviews rating the user, newest first."""  # noqa: DOC201
		return self.visible().filter(subject=user).order_by("-created_at", "-id")

	def given_by(self, user: User) -> ReviewQuerySet:
		"""Every review the user wrote, hidden ones included, newest first."""  # noqa: DOC201
		return self.filter(author=user).order_by("-created_at", "-id")

	def latest_for(self, user: User, limit: int = EXCHANGE_SETTINGS.LATEST_REVIEWS_LIMIT) -> ReviewQuerySet:
		return self.received_by(user).select_related("author")[:limit]


class Review(models.Model):
	"""A participant's rating of the other participant of an exchange request.

	Attributes:
		exchange_request: The exchange being reviewed.
		author: Participant who wrote the review.
		subject: The other participant, who is being rated.
		rating: Score from 1 to 5.
		comment: Free text, at least 10 characters once trimmed.
		is_visible: False once the author or the subject hid the review. Hidden reviews are
			kept, still count towards completion, but are left out of listings and statistics.
		created_at: When the review was submitted; edits are allowed for 24 hours after it.
		modified_at: Last edit, if any.
	"""

	exchange_request = models.ForeignKey(
		"exchange.ExchangeRequest",
		on_delete=models.PROTECT,
		related_name="reviews",
	)
	author = models.ForeignKey("core.User", on_delete=models.CASCADE, related_name="reviews_given")
	subject = models.ForeignKey("core.User", on_delete=models.CASCADE, related_name="reviews_received")
	rating = models.PositiveSmallIntegerField(
		validators=[
			MinValueValidator(EXCHANGE_SETTINGS.MIN_RATING),
			MaxValueValidator(EXCHANGE_SETTINGS.MAX_RATING),
		],
	)
	comment = models.TextField()
	is_visible = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)
	modified_at = models.DateTimeField(null=True, blank=True)

	objects = ReviewQuerySet.as_manager()

	class Meta:  # noqa: D106
		ordering = ("-created_at", "-id")
		indexes = [
			models.Index(fields=["subject", "is_visible"], name="review_subject_visible_idx"),
		]
		constraints = [
			models.UniqueConstraint(fields=["exchange_request", "author"], name="review_one_per_author_per_exchange"),
			models.CheckConstraint(
				condition=Q(rating__gte=EXCHANGE_SETTINGS.MIN_RATING, rating__lte=EXCHANGE_SETTINGS.MAX_RATING),
				name="review_rating_range",
			),
			models.CheckConstraint(condition=~Q(author=F("subject")), name="review_distinct_parties"),
		]

	def __str__(self) -> str:
		return f"{self.author} rated {self.subject} {self.rating}/5 on exchange #{self.exchange_request_id}"

	@staticmethod
	def validate(rating: int, comment: str | None) -> str:
		"""
		Check a rating and a comment.

		Args:
			rating: Score, an integer from 1 to 5.
			comment: Free text.

		Raises:
			ValidationError: If the rating is out of range or the comment too short.

		Returns:
			str: The trimmed comment.
		"""
		if isinstance(rating, bool) or not isinstance(rating, int) or rating not in RATING_RANGE:
			raise ValidationError(
				f"The rating must be an integer between {EXCHANGE_SETTINGS.MIN_RATING} and {EXCHANGE_SETTINGS.MAX_RATING}.",
			)

		comment = (comment or "").strip()

		if len(comment) < EXCHANGE_SETTINGS.MIN_REVIEW_COMMENT_LENGTH:
			raise ValidationError(
				f"The comment must be at least {EXCHANGE_SETTINGS.MIN_REVIEW_COMMENT_LENGTH} characters long.",
			)

		return comment

	@classmethod
	@transaction.atomic
	def submit(cls, exchange_request_id: int, author: User, rating: int, comment: str) -> Review:
		"""
		Review the other participant of an exchange, completing it if this is the second review.

		The exchange request row stays locked from the status check to the completion check, so
		two participants submitting at the same time are serialized and exactly one of them
		completes the exchange.

		Args:
			exchange_request_id: The exchange being reviewed.
			author: The participant writing the review.
			rating: Score from 1 to 5.
			comment: At least 10 characters once trimmed.

		Raises:
			ValidationError: If the rating or the comment is invalid.
			NotFound: If the exchange request does not exist.
			Unauthorized: If the author is not a participant.
			InvalidState: If the exchange was never accepted.
			DuplicateReview: If the author already reviewed this exchange.

		Returns:
			Review: The stored review.
		"""
		comment = cls.validate(rating, comment)
		exchange_request = ExchangeRequest.fetch(exchange_request_id, lock=True)

		require_participant(exchange_request, author, "review")

		if exchange_request.status not in ExchangeStatuses.get_reviewable_statuses():
			raise InvalidState("Only accepted or completed exchanges can be reviewed.")

		if cls.has_reviewed(exchange_request, author):
			raise DuplicateReview

		try:
			with transaction.atomic():
				review = cls.objects.create(
					exchange_request=exchange_request,
					author=author,
					subject=other_participant(exchange_request, author),
					rating=rating,
					comment=comment,
				)

		except IntegrityError as e:
			logger.warning(f"Concurrent duplicate review by user {author.pk} on exchange request {exchange_request.pk}")
			raise DuplicateReview from e

		ExchangeHistory.create_event(
			exchange_request=exchange_request,
			event_type=HistoryEvents.REVIEW_SUBMITTED,
			actor=author,
			message=f"{author} rated {review.subject} {rating}/5.",
		)
		logger.debug(f"Review {review.pk} submitted on exchange request {exchange_request.pk}")

		exchange_request.reconcile_completion()

		return review

	@transaction.atomic
	def edit(self, author: User, rating: int, comment: str) -> Review:
		"""
		Change the rating and the comment within 24 hours of submission.

		Args:
			author: Must be the author of the review.
			rating: New score from 1 to 5.
			comment: New comment, at least 10 characters once trimmed.

		Raises:
			Unauthorized: If the user is not the author.
			EditWindowExpired: If the review is older than 24 hours.
			ValidationError: If the new rating or comment is invalid.

		Returns:
			Review: The updated review.
		"""
		require_review_author(self, author, "edit")

		if not self.is_editable:
			raise EditWindowExpired(
				f"Reviews can only be edited within {EXCHANGE_SETTINGS.REVIEW_EDIT_WINDOW_HOURS} hours of submission.",
			)

		self.comment = self.validate(rating, comment)
		self.rating = rating
		self.modified_at = timezone.now()
		self.save(update_fields=["rating", "comment", "modified_at"])

		self._log_event(HistoryEvents.REVIEW_EDITED, author, f"{author} edited their review.")
		logger.debug(f"Review {self.pk} edited")

		return self

	@transaction.atomic
	def soft_delete(self, user: User) -> Review:
		"""
		Hide the review from listings and statistics. The row is kept.

		Args:
			user: The author or the subject of the review.

		Raises:
			Unauthorized: If the user is neither.

		Returns:
			Review: The hidden review.
		"""
		require_review_party(self, user, "delete")

		if not self.is_visible:
			return self

		self.is_visible = False
		self.save(update_fields=["is_visible"])

		self._log_event(HistoryEvents.REVIEW_HIDDEN, user, f"{user} hid a review.")
		logger.debug(f"Review {self.pk} hidden by user {user.pk}")

		return self

	def _log_event(self, event_type: HistoryEvents, actor: User, message: str) -> None:
		ExchangeHistory.create_event(
			exchange_request=self.exchange_request,
			event_type=event_type,
			actor=actor,
			message=message,
		)

	@property
	def is_editable(self) -> bool:
		"""Whether the review is still inside its edit window."""
		deadline = self.created_at + timedelta(hours=EXCHANGE_SETTINGS.REVIEW_EDIT_WINDOW_HOURS)
		return timezone.now() < deadline

	@classmethod
	def has_reviewed(cls, exchange_request: ExchangeRequest, user: User) -> bool:
		return cls.objects.filter(exchange_request=exchange_request, author=user).exists()

	@classmethod
	def can_review(cls, exchange_request: ExchangeRequest, user: User) -> bool:
		"""Check if the user may still submit a review for the exchange."""  # noqa: DOC201
		return (
			is_participant(exchange_request, user)
			and exchange_request.status in ExchangeStatuses.get_reviewable_statuses()
			and not cls.has_reviewed(exchange_request, user)
		)

	@classmethod
	def statistics(cls, subject: User) -> ReviewStatistics:
		"""
		Compute the reputation of a member from the visible reviews they received.

		Averages and rates are rounded half-up to one decimal and are 0.0 without reviews.

		Args:
			subject: The member being rated.

		Returns:
			ReviewStatistics: Average, count, per-rating distribution, satisfaction rate and
			positive/negative counts.

		Example:
			Visible ratings [5, 5, 4, 3, 2] give an average of 3.8, a satisfaction rate of 60.0
			and a distribution of {1: 0, 2: 1, 3: 1, 4: 1, 5: 2}.
		"""
		reviews = cls.objects.visible().filter(subject=subject)
		aggregates = reviews.aggregate(
			average=Avg("rating"),
			total=Count("id"),
			satisfied=Count("id", filter=Q(rating__gte=EXCHANGE_SETTINGS.SATISFIED_RATING)),
		)

		distribution = dict.fromkeys(RATING_RANGE, 0)
		distribution.update(
			{
				row["rating"]: row["count"]
				for row in reviews.order_by().values("rating").annotate(count=Count("id"))
			},
		)

		total = aggregates["total"]

		return ReviewStatistics(
			average_rating=round_half_up(aggregates["average"]) if total else 0.0,
			total_reviews=total,
			distribution=distribution,
			satisfaction_rate=round_half_up(aggregates["satisfied"] * 100 / total) if total else 0.0,
			positive_reviews=distribution[4] + distribution[5],
			negative_reviews=distribution[1] + distribution[2],
		)
