from enum import StrEnum


class OfferKinds(StrEnum):
	"""The kinds of offer an exchange can target."""

	ITEM = "item"
	SKILL = "skill"
