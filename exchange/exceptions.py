"""Error kinds raised by exchange negotiations.

Every error is an expected, caller-facing condition. They are DRF ``APIException`` subclasses,
so the views let them propagate and DRF renders each kind with its own status code.
None of them is worth retrying.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class ExchangeError(APIException):
	"""Base class for exchange negotiation errors."""

	status_code = status.HTTP_400_BAD_REQUEST
	default_detail = "The exchange operation could not be completed."
	default_code = "exchange_error"


class ValidationError(ExchangeError):
	"""Malformed or missing input."""

	default_detail = "Invalid exchange data."
	default_code = "invalid"


class InvalidRequest(ExchangeError):
	"""The targeted offer cannot be requested (unavailable, or owned by the requester)."""

	default_detail = "This offer cannot be requested."
	default_code = "invalid_request"


class Unauthorized(ExchangeError):
	"""The acting user lacks the required relationship to the exchange or review."""

	status_code = status.HTTP_403_FORBIDDEN
	default_detail = "You are not allowed to perform this action."
	default_code = "unauthorized"


class NotFound(ExchangeError):
	"""A referenced exchange request, review or offer does not exist."""

	status_code = status.HTTP_404_NOT_FOUND
	default_detail = "Not found."
	default_code = "not_found"


class InvalidState(ExchangeError):
	"""The exchange request is not in a status that allows the operation."""

	status_code = status.HTTP_409_CONFLICT
	default_detail = "The exchange request does not allow this operation in its current status."
	default_code = "invalid_state"


class InvalidTransition(InvalidState):
	"""The requested status change is not an edge of the exchange state machine."""

	default_detail = "This status change is not allowed."
	default_code = "invalid_transition"


class DuplicateReview(ExchangeError):
	"""The author already reviewed this exchange request."""

	status_code = status.HTTP_409_CONFLICT
	default_detail = "You already reviewed this exchange."
	default_code = "duplicate_review"


class EditWindowExpired(ExchangeError):
	"""The review can no longer be edited."""

	status_code = status.HTTP_403_FORBIDDEN
	default_detail = "This review can no longer be edited."
	default_code = "edit_window_expired"
