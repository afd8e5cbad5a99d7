"""
Tests for messaging between the participants of an exchange request.
"""

import pytest

from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.exceptions import InvalidState, Unauthorized, ValidationError
from exchange.models import ExchangeRequest, Message


def test_messaging_is_closed_while_pending(pending_request, requester):
	assert not pending_request.can_send_message(requester)

	with pytest.raises(InvalidState):
		pending_request.send_message(requester, "Hi")


def test_outsider_cannot_send(accepted_request, outsider):
	assert not accepted_request.can_send_message(outsider)

	with pytest.raises(Unauthorized):
		accepted_request.send_message(outsider, "Hi")


@pytest.mark.parametrize("content", ["", "   ", None])
def test_blank_content_is_rejected(accepted_request, requester, content):
	with pytest.raises(ValidationError):
		accepted_request.send_message(requester, content)


def test_send_goes_to_the_other_participant(accepted_request, requester, owner):
	message = accepted_request.send_message(requester, "  Hi  ")

	assert message.sender == requester
	assert message.recipient == owner
	assert message.content == "Hi"
	assert message.is_read is False
	assert accepted_request.can_send_message(owner)


def test_history_is_in_sending_order(accepted_request, requester, owner):
	accepted_request.send_message(requester, "Hi")
	accepted_request.send_message(owner, "Hello")
	accepted_request.send_message(requester, "Saturday works for me")

	history = accepted_request.message_history(owner)

	assert [message.content for message in history] == ["Hi", "Hello", "Saturday works for me"]
	assert [message.sender for message in history] == [requester, owner, requester]


def test_history_stays_readable_after_completion(accepted_request, requester, owner):
	accepted_request.send_message(requester, "Hi")
	ExchangeRequest.objects.filter(pk=accepted_request.pk).update(status=ExchangeStatuses.COMPLETED)
	accepted_request.refresh_from_db()

	assert accepted_request.can_view_history(requester)
	assert [message.content for message in accepted_request.message_history(requester)] == ["Hi"]

	with pytest.raises(InvalidState):
		accepted_request.send_message(owner, "Thanks again")


def test_outsider_cannot_read_history(accepted_request, outsider):
	assert not accepted_request.can_view_history(outsider)

	with pytest.raises(Unauthorized):
		accepted_request.message_history(outsider)


def test_mark_messages_read_only_touches_received_messages(accepted_request, requester, owner):
	accepted_request.send_message(requester, "Hi")
	accepted_request.send_message(requester, "Are you there?")
	reply = accepted_request.send_message(owner, "Hello")

	assert Message.objects.unread_count_for(owner) == 2
	assert accepted_request.unread_messages_for(owner).count() == 2

	assert accepted_request.mark_messages_read(owner) == 2

	reply.refresh_from_db()
	assert Message.objects.unread_count_for(owner) == 0
	assert reply.is_read is False
	assert Message.objects.unread_count_for(requester) == 1


def test_mark_messages_read_requires_participant(accepted_request, outsider):
	with pytest.raises(Unauthorized):
		accepted_request.mark_messages_read(outsider)


def test_mark_read(accepted_request, requester):
	message = accepted_request.send_message(requester, "Hi")
	message.mark_read()

	message.refresh_from_db()
	assert message.is_read is True
