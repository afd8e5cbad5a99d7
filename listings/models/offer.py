from django.db import models


class Offer(models.Model):
	"""Something a member puts up for exchange. Only ``owner`` and ``available`` matter to negotiations."""

	owner = models.ForeignKey("core.User", on_delete=models.CASCADE, related_name="%(class)ss")
	title = models.CharField(max_length=100)
	description = models.TextField(max_length=1000, blank=True)
	category = models.CharField(max_length=50, blank=True)
	wanted_in_return = models.CharField(
		max_length=255,
		blank=True,
		help_text="What the owner would like to receive in exchange",
	)
	available = models.BooleanField(
		default=True,
		help_text="Whether the offer can still be requested; cleared when an exchange is accepted",
	)

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		abstract = True
		ordering = ("-created_at",)

	def __str__(self) -> str:
		return f"{self.title} ({self.owner})"


class Item(Offer):
	"""A physical good offered for loan, gift or swap."""

	class Modes(models.TextChoices):
		LOAN = "loan", "Loan"
		GIFT = "gift", "Gift"
		SWAP = "swap", "Swap"

	mode = models.CharField(max_length=10, choices=Modes.choices, default=Modes.SWAP)

	class Meta(Offer.Meta):
		indexes = (models.Index(fields=["owner", "available"], name="item_owner_available_idx"),)


class Skill(Offer):
	"""Know-how a member offers to share (lessons, repairs, help...)."""

	class Levels(models.TextChoices):
		BEGINNER = "beginner", "Beginner"
		INTERMEDIATE = "intermediate", "Intermediate"
		EXPERT = "expert", "Expert"

	level = models.CharField(max_length=20, choices=Levels.choices, default=Levels.INTERMEDIATE)

	class Meta(Offer.Meta):
		indexes = (models.Index(fields=["owner", "available"], name="skill_owner_available_idx"),)
