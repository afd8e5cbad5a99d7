from .exchange_action import ExchangeActionView
from .exchange_request import ExchangeRequestViewSet
from .message import MessageListCreateView, mark_messages_read
from .review import ReviewViewSet, review_statistics_view

__all__ = [
	"ExchangeActionView",
	"ExchangeRequestViewSet",
	"MessageListCreateView",
	"ReviewViewSet",
	"mark_messages_read",
	"review_statistics_view",
]
