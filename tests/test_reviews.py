"""
Tests for review submission, edition, hiding, and exchange completion.
"""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.enums.history_events import HistoryEvents
from exchange.exceptions import DuplicateReview, EditWindowExpired, InvalidState, NotFound, Unauthorized, ValidationError
from exchange.models import ExchangeRequest, Review
from exchange.types.target import ItemTarget

SUBMITTED_AT = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.get_fixed_timezone(0))


def _submit_at(moment, exchange_request, author, rating=4, comment="Great exchange, very punctual"):
	with patch("django.utils.timezone.now", return_value=moment):
		return Review.submit(exchange_request.pk, author, rating, comment)


def test_full_exchange_scenario(requester, owner, item, proposed_at):
	"""Request, accept, chat, then both reviews complete the exchange."""
	exchange_request = ExchangeRequest.create_request(
		requester=requester,
		target=ItemTarget(item.pk),
		proposal="A jar of homemade jam",
		message="Could I borrow your drill?",
		proposed_at=proposed_at,
	)
	assert exchange_request.status == ExchangeStatuses.PENDING

	exchange_request.accept(owner)
	item.refresh_from_db()
	assert exchange_request.status == ExchangeStatuses.ACCEPTED
	assert item.available is False

	exchange_request.send_message(requester, "Hi")
	exchange_request.send_message(owner, "Hello")
	assert [message.content for message in exchange_request.message_history(requester)] == ["Hi", "Hello"]

	Review.submit(exchange_request.pk, requester, 4, "Great exchange, very punctual")
	exchange_request.refresh_from_db()
	assert exchange_request.status == ExchangeStatuses.ACCEPTED

	Review.submit(exchange_request.pk, owner, 5, "Smooth and friendly")
	exchange_request.refresh_from_db()
	assert exchange_request.status == ExchangeStatuses.COMPLETED

	assert [entry["event"] for entry in exchange_request.timeline] == [
		HistoryEvents.CREATED,
		HistoryEvents.ACCEPTED,
		HistoryEvents.REVIEW_SUBMITTED,
		HistoryEvents.REVIEW_SUBMITTED,
		HistoryEvents.COMPLETED,
	]


def test_review_rates_the_other_participant(accepted_request, requester, owner):
	review = Review.submit(accepted_request.pk, owner, 5, "  Smooth and friendly  ")

	assert review.author == owner
	assert review.subject == requester
	assert review.comment == "Smooth and friendly"
	assert review.is_visible is True
	assert review.modified_at is None


@pytest.mark.parametrize("status", [ExchangeStatuses.PENDING, ExchangeStatuses.REFUSED, ExchangeStatuses.CANCELLED])
def test_review_requires_a_consummated_exchange(requester, owner, make_exchange, status):
	exchange_request = make_exchange(requester, owner, status)

	with pytest.raises(InvalidState):
		Review.submit(exchange_request.pk, requester, 4, "Great exchange, very punctual")

	assert not Review.can_review(exchange_request, requester)


@pytest.mark.parametrize("rating", [0, 6, -1, True, "5", 4.5])
def test_rating_out_of_range(accepted_request, requester, rating):
	with pytest.raises(ValidationError):
		Review.submit(accepted_request.pk, requester, rating, "Great exchange, very punctual")


@pytest.mark.parametrize("comment", ["", "Too short", "     nice      ", None])
def test_comment_too_short(accepted_request, requester, comment):
	with pytest.raises(ValidationError):
		Review.submit(accepted_request.pk, requester, 4, comment)


def test_outsider_cannot_review(accepted_request, outsider):
	with pytest.raises(Unauthorized):
		Review.submit(accepted_request.pk, outsider, 4, "Great exchange, very punctual")


def test_review_on_missing_exchange(requester):
	with pytest.raises(NotFound):
		Review.submit(999_999, requester, 4, "Great exchange, very punctual")


def test_second_review_by_same_author(accepted_request, requester):
	Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	assert Review.has_reviewed(accepted_request, requester)
	assert not Review.can_review(accepted_request, requester)

	with pytest.raises(DuplicateReview):
		Review.submit(accepted_request.pk, requester, 5, "Changed my mind, it was perfect")

	assert accepted_request.reviews.count() == 1


def test_duplicate_caught_by_the_database(accepted_request, requester):
	Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	with patch.object(Review, "has_reviewed", return_value=False), pytest.raises(DuplicateReview):
		Review.submit(accepted_request.pk, requester, 5, "Changed my mind, it was perfect")

	assert accepted_request.reviews.count() == 1


def test_unique_constraint(accepted_request, requester, owner):
	Review.objects.create(exchange_request=accepted_request, author=requester, subject=owner, rating=4, comment="Fine")

	with pytest.raises(IntegrityError), transaction.atomic():
		Review.objects.create(exchange_request=accepted_request, author=requester, subject=owner, rating=2, comment="Bad")


def test_review_after_completion_is_a_duplicate(accepted_request, requester, owner):
	Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")
	Review.submit(accepted_request.pk, owner, 5, "Smooth and friendly")

	accepted_request.refresh_from_db()
	assert accepted_request.status == ExchangeStatuses.COMPLETED

	with pytest.raises(DuplicateReview):
		Review.submit(accepted_request.pk, owner, 3, "Second thoughts about it")


def test_hidden_review_still_completes_the_exchange(accepted_request, requester, owner):
	first = Review.submit(accepted_request.pk, requester, 2, "Arrived an hour late")
	first.soft_delete(owner)

	Review.submit(accepted_request.pk, owner, 5, "Smooth and friendly")

	accepted_request.refresh_from_db()
	assert accepted_request.status == ExchangeStatuses.COMPLETED


def test_completion_notifies_both_participants(accepted_request, requester, owner):
	Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")
	Review.submit(accepted_request.pk, owner, 5, "Smooth and friendly")

	for user in (requester, owner):
		assert user.notifications.filter(message__contains="is complete").count() == 1


def test_edit_just_inside_the_window(accepted_request, requester):
	review = _submit_at(SUBMITTED_AT, accepted_request, requester)
	edited_at = SUBMITTED_AT + timedelta(hours=23, minutes=59)

	with patch("django.utils.timezone.now", return_value=edited_at):
		assert review.is_editable
		review.edit(requester, 5, "Even better on second thought")

	review.refresh_from_db()
	assert review.rating == 5
	assert review.comment == "Even better on second thought"
	assert review.modified_at == edited_at


def test_edit_just_outside_the_window(accepted_request, requester):
	review = _submit_at(SUBMITTED_AT, accepted_request, requester)

	with patch("django.utils.timezone.now", return_value=SUBMITTED_AT + timedelta(hours=24, minutes=1)):
		assert not review.is_editable

		with pytest.raises(EditWindowExpired):
			review.edit(requester, 5, "Even better on second thought")

	review.refresh_from_db()
	assert review.rating == 4


def test_only_the_author_edits(accepted_request, requester, owner):
	review = Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	with pytest.raises(Unauthorized):
		review.edit(owner, 1, "I would rather rate myself")


def test_edit_revalidates(accepted_request, requester):
	review = Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	with pytest.raises(ValidationError):
		review.edit(requester, 6, "Great exchange, very punctual")

	with pytest.raises(ValidationError):
		review.edit(requester, 3, "meh")


def test_soft_delete_keeps_the_row(accepted_request, requester, owner):
	review = Review.submit(accepted_request.pk, requester, 2, "Arrived an hour late")
	review.soft_delete(owner)

	review.refresh_from_db()
	assert review.is_visible is False
	assert Review.objects.filter(pk=review.pk).exists()
	assert not Review.objects.received_by(owner).exists()
	assert Review.objects.given_by(requester).get() == review
	assert accepted_request.history.filter(event_type=HistoryEvents.REVIEW_HIDDEN).count() == 1


def test_soft_delete_by_author(accepted_request, requester):
	review = Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")
	review.soft_delete(requester)

	assert review.is_visible is False


def test_outsider_cannot_soft_delete(accepted_request, requester, outsider):
	review = Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	with pytest.raises(Unauthorized):
		review.soft_delete(outsider)

	review.refresh_from_db()
	assert review.is_visible is True
