"""Lookup and availability switches over offers, as consumed by exchange negotiations.

The registry is the only seam through which negotiations touch listings: they read an
offer's owner and availability, and flip availability when an exchange is accepted.
"""

import logging

from django.core.exceptions import ObjectDoesNotExist

from listings.enums.offer_kinds import OfferKinds
from listings.models import Item, Skill
from listings.models.offer import Offer

logger = logging.getLogger(__name__)

OFFER_MODELS: dict[OfferKinds, type[Offer]] = {
	OfferKinds.ITEM: Item,
	OfferKinds.SKILL: Skill,
}


class OfferNotFound(ObjectDoesNotExist):
	"""Raised when no offer of the requested kind has the given id."""


def find_by_id(kind: OfferKinds, offer_id: int, *, lock: bool = False) -> Offer:
	"""
	Fetch an offer by kind and id.

	Args:
		kind: Whether the offer is an item or a skill.
		offer_id: Primary key of the offer.
		lock: Row-lock the offer for the rest of the current transaction.

	Raises:
		OfferNotFound: If the offer does not exist.

	Returns:
		Offer: The item or skill.
	"""
	model = OFFER_MODELS[OfferKinds(kind)]
	queryset = model.objects.select_related("owner")

	if lock:
		queryset = queryset.select_for_update()

	try:
		return queryset.get(pk=offer_id)

	except model.DoesNotExist as e:
		raise OfferNotFound(f"No {kind} with id {offer_id}.") from e


def set_available(offer: Offer, available: bool) -> None:  # noqa: FBT001
	"""
	Flip the availability flag of an offer.

	Args:
		offer: The item or skill.
		available: The new availability.
	"""
	if offer.available == available:
		return

	offer.available = available
	offer.save(update_fields=["available", "updated_at"])

	logger.debug(f"{offer._meta.model_name} {offer.pk} availability set to {available}")
