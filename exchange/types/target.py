from dataclasses import dataclass
from typing import ClassVar

from listings.enums.offer_kinds import OfferKinds


@dataclass(frozen=True)
class ItemTarget:
	"""An exchange request aimed at a physical item."""

	kind: ClassVar[OfferKinds] = OfferKinds.ITEM
	ref: int


@dataclass(frozen=True)
class SkillTarget:
	"""An exchange request aimed at a skill."""

	kind: ClassVar[OfferKinds] = OfferKinds.SKILL
	ref: int


Target = ItemTarget | SkillTarget


def make_target(kind: OfferKinds | str, ref: int) -> Target:
	"""
	Build the target matching an offer kind.

	Args:
		kind: Whether the target is an item or a skill.
		ref: Primary key of the targeted offer.

	Raises:
		ValueError: If the kind is unknown.

	Returns:
		Target: The tagged target.
	"""
	if kind == OfferKinds.ITEM:
		return ItemTarget(ref)

	if kind == OfferKinds.SKILL:
		return SkillTarget(ref)

	raise ValueError(f"Unknown target kind: {kind}")
