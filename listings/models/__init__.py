from .offer import Item, Skill

__all__ = [
	"Item",
	"Skill",
]
