from typing import TypedDict


class ReviewStatistics(TypedDict):
	"""Reputation figures derived from the visible reviews a member received."""

	average_rating: float
	total_reviews: int
	distribution: dict[int, int]
	satisfaction_rate: float
	positive_reviews: int
	negative_reviews: int
