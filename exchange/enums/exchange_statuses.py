from enum import StrEnum


class ExchangeStatuses(StrEnum):
	"""The status of an exchange request."""

	PENDING = "pending"
	ACCEPTED = "accepted"
	REFUSED = "refused"
	CANCELLED = "cancelled"
	COMPLETED = "completed"

	@classmethod
	def get_transitions(cls) -> dict["ExchangeStatuses", set["ExchangeStatuses"]]:
		"""
		Get the allowed status changes, keyed by current status.

		COMPLETED is only reachable from ACCEPTED, and only once both participants reviewed each other.

		Returns:
			dict[ExchangeStatuses, set[ExchangeStatuses]]: Reachable statuses for each status.
		"""
		return {
			cls.PENDING: {cls.ACCEPTED, cls.REFUSED, cls.CANCELLED},
			cls.ACCEPTED: {cls.COMPLETED},
			cls.REFUSED: set(),
			cls.CANCELLED: set(),
			cls.COMPLETED: set(),
		}

	@classmethod
	def get_reviewable_statuses(cls) -> list["ExchangeStatuses"]:
		"""
		Get the statuses in which participants may review each other.

		Returns:
			list[ExchangeStatuses]: Statuses of a consummated exchange.
		"""
		return [cls.ACCEPTED, cls.COMPLETED]

	def can_transition_to(self, status: "ExchangeStatuses") -> bool:
		"""Check whether ``status`` is directly reachable from this status."""  # noqa: DOC201
		return status in self.get_transitions()[self]

	@property
	def is_terminal(self) -> bool:
		"""Check whether no further transition can leave this status."""
		return not self.get_transitions()[self]
