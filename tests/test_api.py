"""
Tests for the HTTP endpoints of exchange requests, messages and reviews.
"""

import pytest
from rest_framework import status

from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.models import ExchangeRequest, Review


@pytest.fixture
def as_user(api_client):
	def _as_user(user):
		api_client.force_authenticate(user=user)
		return api_client

	return _as_user


def test_health(api_client, db):
	response = api_client.get("/health/")

	assert response.status_code == status.HTTP_200_OK


def test_anonymous_requests_are_rejected(api_client, db):
	response = api_client.get("/exchanges/")

	assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_exchange_request(as_user, requester, item, proposed_at):
	response = as_user(requester).post(
		"/exchanges/",
		{
			"target_kind": "item",
			"target_id": item.pk,
			"proposal": "A jar of homemade jam",
			"message": "Could I borrow your drill?",
			"proposed_at": proposed_at.isoformat(),
		},
		format="json",
	)

	assert response.status_code == status.HTTP_201_CREATED
	assert response.data["status"] == ExchangeStatuses.PENDING
	assert response.data["offer"]["title"] == item.title
	assert response.data["requester"]["username"] == requester.username
	assert ExchangeRequest.objects.count() == 1


def test_create_exchange_request_on_own_item(as_user, owner, item, proposed_at):
	response = as_user(owner).post(
		"/exchanges/",
		{
			"target_kind": "item",
			"target_id": item.pk,
			"proposal": "Nothing",
			"message": "Mine already",
			"proposed_at": proposed_at.isoformat(),
		},
		format="json",
	)

	assert response.status_code == status.HTTP_400_BAD_REQUEST
	assert response.data["detail"].code == "invalid_request"


def test_list_only_involving_the_caller(as_user, pending_request, requester, outsider):
	assert len(as_user(requester).get("/exchanges/").data) == 1
	assert len(as_user(outsider).get("/exchanges/").data) == 0


def test_list_filtered_by_role(as_user, pending_request, requester):
	client = as_user(requester)

	assert len(client.get("/exchanges/", {"role": "sent"}).data) == 1
	assert len(client.get("/exchanges/", {"role": "received"}).data) == 0


def test_detail_includes_the_timeline(as_user, accepted_request, owner):
	response = as_user(owner).get(f"/exchanges/{accepted_request.pk}/")

	assert response.status_code == status.HTTP_200_OK
	assert [entry["event"] for entry in response.data["timeline"]] == ["created", "accepted"]
	assert response.data["timeline"][1]["actor"]["username"] == owner.username


def test_detail_is_forbidden_to_outsiders(as_user, pending_request, outsider):
	response = as_user(outsider).get(f"/exchanges/{pending_request.pk}/")

	assert response.status_code == status.HTTP_403_FORBIDDEN


def test_accept_action(as_user, pending_request, owner):
	client = as_user(owner)
	payload = {"action": "accept", "exchange_id": pending_request.pk}

	response = client.post("/exchanges/actions/", payload, format="json")
	assert response.status_code == status.HTTP_200_OK
	assert response.data["status"] == ExchangeStatuses.ACCEPTED

	response = client.post("/exchanges/actions/", payload, format="json")
	assert response.status_code == status.HTTP_409_CONFLICT
	assert response.data["detail"].code == "invalid_transition"


def test_action_by_wrong_participant(as_user, pending_request, requester):
	response = as_user(requester).post(
		"/exchanges/actions/",
		{"action": "accept", "exchange_id": pending_request.pk},
		format="json",
	)

	assert response.status_code == status.HTTP_403_FORBIDDEN


def test_action_requires_payload(as_user, requester):
	response = as_user(requester).post("/exchanges/actions/", {"action": "cancel"}, format="json")

	assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_action_on_missing_exchange(as_user, requester):
	response = as_user(requester).post(
		"/exchanges/actions/",
		{"action": "cancel", "exchange_id": 999_999},
		format="json",
	)

	assert response.status_code == status.HTTP_404_NOT_FOUND


def test_messages(as_user, accepted_request, requester, owner):
	url = f"/exchanges/{accepted_request.pk}/messages/"

	response = as_user(requester).post(url, {"content": "Hi"}, format="json")
	assert response.status_code == status.HTTP_201_CREATED
	assert response.data["recipient"]["username"] == owner.username

	client = as_user(owner)
	assert client.post(url, {"content": "Hello"}, format="json").status_code == status.HTTP_201_CREATED
	assert [message["content"] for message in client.get(url).data] == ["Hi", "Hello"]

	response = client.post(f"{url}read/")
	assert response.data == {"marked_read": 1}


def test_messages_closed_while_pending(as_user, pending_request, requester):
	response = as_user(requester).post(
		f"/exchanges/{pending_request.pk}/messages/",
		{"content": "Hi"},
		format="json",
	)

	assert response.status_code == status.HTTP_409_CONFLICT


def test_blank_message(as_user, accepted_request, requester):
	response = as_user(requester).post(
		f"/exchanges/{accepted_request.pk}/messages/",
		{"content": "   "},
		format="json",
	)

	assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_messages_forbidden_to_outsiders(as_user, accepted_request, outsider):
	response = as_user(outsider).get(f"/exchanges/{accepted_request.pk}/messages/")

	assert response.status_code == status.HTTP_403_FORBIDDEN


def test_review_lifecycle(as_user, accepted_request, requester, owner):
	response = as_user(requester).post(
		"/reviews/",
		{"exchange_request": accepted_request.pk, "rating": 4, "comment": "Great exchange, very punctual"},
		format="json",
	)
	assert response.status_code == status.HTTP_201_CREATED
	review_id = response.data["id"]

	response = as_user(requester).patch(
		f"/reviews/{review_id}/",
		{"rating": 5, "comment": "Even better on second thought"},
		format="json",
	)
	assert response.status_code == status.HTTP_200_OK
	assert response.data["rating"] == 5

	received = as_user(owner).get("/reviews/").data
	assert [review["id"] for review in received] == [review_id]

	response = as_user(owner).delete(f"/reviews/{review_id}/")
	assert response.status_code == status.HTTP_204_NO_CONTENT
	assert Review.objects.get(pk=review_id).is_visible is False
	assert as_user(owner).get("/reviews/").data == []
	assert len(as_user(requester).get("/reviews/", {"given": "true"}).data) == 1


def test_duplicate_review(as_user, accepted_request, requester):
	client = as_user(requester)
	payload = {"exchange_request": accepted_request.pk, "rating": 4, "comment": "Great exchange, very punctual"}

	assert client.post("/reviews/", payload, format="json").status_code == status.HTTP_201_CREATED

	response = client.post("/reviews/", payload, format="json")
	assert response.status_code == status.HTTP_409_CONFLICT
	assert response.data["detail"].code == "duplicate_review"


def test_invalid_rating(as_user, accepted_request, requester):
	response = as_user(requester).post(
		"/reviews/",
		{"exchange_request": accepted_request.pk, "rating": 6, "comment": "Great exchange, very punctual"},
		format="json",
	)

	assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_edit_someone_elses_review(as_user, accepted_request, requester, owner):
	review = Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	response = as_user(owner).patch(
		f"/reviews/{review.pk}/",
		{"rating": 1, "comment": "Rewriting history here"},
		format="json",
	)

	assert response.status_code == status.HTTP_403_FORBIDDEN


def test_review_statistics(as_user, accepted_request, requester, owner, outsider):
	Review.submit(accepted_request.pk, requester, 4, "Great exchange, very punctual")

	response = as_user(outsider).get(f"/users/{owner.pk}/review-stats/")

	assert response.status_code == status.HTTP_200_OK
	assert response.data["statistics"]["average_rating"] == 4.0
	assert response.data["statistics"]["distribution"][4] == 1
	assert len(response.data["latest_reviews"]) == 1


def test_review_statistics_of_missing_user(as_user, outsider):
	response = as_user(outsider).get("/users/999999/review-stats/")

	assert response.status_code == status.HTTP_404_NOT_FOUND


def test_summary(as_user, accepted_request, requester, owner):
	accepted_request.send_message(requester, "Hi")

	response = as_user(owner).get("/exchanges/summary/")

	assert response.status_code == status.HTTP_200_OK
	assert response.data["received"] == 1
	assert response.data["accepted_received"] == 1
	assert response.data["active"] == 1
	assert response.data["pending_received"] == 0
	assert response.data["unread_messages"] == 1
