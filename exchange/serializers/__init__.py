from .exchange_request import ExchangeRequestCreateSerializer, ExchangeRequestSerializer
from .message import MessageCreateSerializer, MessageSerializer
from .review import ReviewCreateSerializer, ReviewSerializer, ReviewWriteSerializer

__all__ = [
	"ExchangeRequestCreateSerializer",
	"ExchangeRequestSerializer",
	"MessageCreateSerializer",
	"MessageSerializer",
	"ReviewCreateSerializer",
	"ReviewSerializer",
	"ReviewWriteSerializer",
]
