from datetime import datetime
from typing import Optional, TypedDict

from core.models import User
from exchange.enums.history_events import HistoryEvents


class TimelineEntry(TypedDict):
	"""A timeline entry for an exchange request."""
	event: HistoryEvents
	timestamp: datetime
	actor: Optional[User]
	description: str
