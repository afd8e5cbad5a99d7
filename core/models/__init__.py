from .notification import Notification
from .user import User

__all__ = [
	"Notification",
	"User",
]
