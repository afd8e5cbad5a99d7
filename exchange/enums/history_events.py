from enum import StrEnum


class HistoryEvents(StrEnum):
	"""Events recorded in an exchange request's audit trail."""

	CREATED = "created"
	ACCEPTED = "accepted"
	REFUSED = "refused"
	CANCELLED = "cancelled"
	REVIEW_SUBMITTED = "review_submitted"
	REVIEW_EDITED = "review_edited"
	REVIEW_HIDDEN = "review_hidden"
	COMPLETED = "completed"
