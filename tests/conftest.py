from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import User
from exchange.enums.exchange_statuses import ExchangeStatuses
from exchange.models import ExchangeRequest
from exchange.types.target import ItemTarget
from listings.models import Item, Skill


@pytest.fixture
def requester(db):
	return User.objects.create_user(username="alice", password="secret", first_name="Alice", city="Lyon")


@pytest.fixture
def owner(db):
	return User.objects.create_user(username="bob", password="secret", first_name="Bob", city="Lyon")


@pytest.fixture
def outsider(db):
	return User.objects.create_user(username="carol", password="secret", city="Nantes")


@pytest.fixture
def item(owner):
	return Item.objects.create(owner=owner, title="Electric drill", category="tools", wanted_in_return="Books")


@pytest.fixture
def skill(owner):
	return Skill.objects.create(owner=owner, title="Guitar lessons", category="music")


@pytest.fixture
def proposed_at():
	return timezone.now() + timedelta(days=3)


@pytest.fixture
def pending_request(requester, item, proposed_at):
	return ExchangeRequest.create_request(
		requester=requester,
		target=ItemTarget(item.pk),
		proposal="A jar of homemade jam",
		message="Could I borrow your drill for the weekend?",
		proposed_at=proposed_at,
	)


@pytest.fixture
def accepted_request(pending_request, owner):
	return pending_request.accept(owner)


@pytest.fixture
def make_exchange(proposed_at):
	"""Build an exchange request directly in the given status, bypassing the lifecycle."""

	def _make_exchange(requester, owner, status=ExchangeStatuses.ACCEPTED):
		offer = Item.objects.create(owner=owner, title=f"Item for {requester}", available=False)

		return ExchangeRequest.objects.create(
			requester=requester,
			owner=owner,
			target_kind=ItemTarget.kind,
			item=offer,
			proposal="Anything you like",
			message="Interested in swapping",
			proposed_at=proposed_at,
			status=status,
		)

	return _make_exchange


@pytest.fixture
def api_client():
	return APIClient()
