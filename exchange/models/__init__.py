from .exchange_history import ExchangeHistory
from .exchange_request import ExchangeRequest
from .message import Message
from .review import Review

__all__ = ["ExchangeHistory", "ExchangeRequest", "Message", "Review"]
