"""Who may act on an exchange request or a review.

Pure predicates over already-loaded objects: no queries, no writes. Every mutating operation
goes through one of the ``require_*`` helpers before touching state, so all of them fail with
the same ``Unauthorized`` error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from exchange.exceptions import Unauthorized

if TYPE_CHECKING:
	from core.models import User
	from exchange.models import ExchangeRequest, Review


def _user_id(user: Any) -> int | None:  # noqa: ANN401
	if user is None or not getattr(user, "is_authenticated", False):
		return None

	return user.pk


def is_requester(exchange_request: ExchangeRequest, user: User | None) -> bool:
	"""Check if the user initiated the exchange request."""  # noqa: DOC201
	user_id = _user_id(user)
	return user_id is not None and exchange_request.requester_id == user_id


def is_owner(exchange_request: ExchangeRequest, user: User | None) -> bool:
	"""Check if the user owns the targeted offer, i.e. received the request."""  # noqa: DOC201
	user_id = _user_id(user)
	return user_id is not None and exchange_request.owner_id == user_id


def is_participant(exchange_request: ExchangeRequest, user: User | None) -> bool:
	"""Check if the user is the requester or the owner."""  # noqa: DOC201
	return is_requester(exchange_request, user) or is_owner(exchange_request, user)


def is_review_author(review: Review, user: User | None) -> bool:
	"""Check if the user wrote the review."""  # noqa: DOC201
	user_id = _user_id(user)
	return user_id is not None and review.author_id == user_id


def is_review_party(review: Review, user: User | None) -> bool:
	"""Check if the user wrote the review or is the one being rated."""  # noqa: DOC201
	user_id = _user_id(user)
	return user_id is not None and user_id in {review.author_id, review.subject_id}


def other_participant(exchange_request: ExchangeRequest, user: User | None) -> User:
	"""
	Get the participant facing ``user`` in the exchange.

	Args:
		exchange_request: The exchange request.
		user: One of its participants.

	Raises:
		Unauthorized: If the user is not a participant.

	Returns:
		User: The owner when ``user`` is the requester, the requester otherwise.
	"""
	if is_requester(exchange_request, user):
		return exchange_request.owner

	if is_owner(exchange_request, user):
		return exchange_request.requester

	raise Unauthorized("You are not a participant of this exchange.")


def require_owner(exchange_request: ExchangeRequest, user: User | None, action: str) -> None:
	"""
	Ensure the user owns the targeted offer.

	Args:
		exchange_request: The exchange request.
		user: The acting user.
		action: What the user is trying to do, for the error message.

	Raises:
		Unauthorized: If the user is not the owner.
	"""
	if not is_owner(exchange_request, user):
		raise Unauthorized(f"Only the owner of the offer can {action} this exchange request.")


def require_requester(exchange_request: ExchangeRequest, user: User | None, action: str) -> None:
	"""
	Ensure the user initiated the exchange request.

	Args:
		exchange_request: The exchange request.
		user: The acting user.
		action: What the user is trying to do, for the error message.

	Raises:
		Unauthorized: If the user is not the requester.
	"""
	if not is_requester(exchange_request, user):
		raise Unauthorized(f"Only the requester can {action} this exchange request.")


def require_participant(exchange_request: ExchangeRequest, user: User | None, action: str) -> None:
	"""
	Ensure the user takes part in the exchange.

	Args:
		exchange_request: The exchange request.
		user: The acting user.
		action: What the user is trying to do, for the error message.

	Raises:
		Unauthorized: If the user is neither the requester nor the owner.
	"""
	if not is_participant(exchange_request, user):
		raise Unauthorized(f"Only participants can {action} this exchange.")


def require_review_author(review: Review, user: User | None, action: str) -> None:
	"""
	Ensure the user wrote the review.

	Raises:
		Unauthorized: If the user is not the author.
	"""
	if not is_review_author(review, user):
		raise Unauthorized(f"Only the author can {action} this review.")


def require_review_party(review: Review, user: User | None, action: str) -> None:
	"""
	Ensure the user wrote the review or is rated by it.

	Raises:
		Unauthorized: If the user is neither the author nor the subject.
	"""
	if not is_review_party(review, user):
		raise Unauthorized(f"Only the author or the rated member can {action} this review.")
