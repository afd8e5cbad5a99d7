from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
	"""A member of the exchange community, offering items or skills and asking for others."""

	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)
	city = models.CharField(max_length=100, blank=True, help_text="City where the member usually meets to exchange")
	phone_country_code = models.CharField(max_length=8, blank=True, help_text="User's cellphone country code")
	phone_number = models.CharField(max_length=31, blank=True, help_text="User's cellphone number")

	def __str__(self) -> str:
		return self.username

	@property
	def display_name(self) -> str:
		"""Full name when the member filled it in, username otherwise."""
		return self.get_full_name() or self.username

	@property
	def phone(self) -> str:
		"""Returns the full phone number including country code."""
		if self.phone_country_code and self.phone_number:
			return f"+{self.phone_country_code}{self.phone_number}"

		return ""
