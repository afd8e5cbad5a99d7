from __future__ import annotations

from collections.abc import Iterable

from django.db import models, transaction

from swapmeet.common.singletons.sms import get_sms_service
from swapmeet.settings import ENV


class Notification(models.Model):
	"""Model representing a notification for a user."""

	LEVEL_CHOICES = (
		("info", "Info"),
		("success", "Success"),
		("warning", "Warning"),
		("error", "Error"),
	)
	user = models.ForeignKey("core.User", on_delete=models.CASCADE, related_name="notifications")
	message = models.CharField(max_length=255)
	is_read = models.BooleanField(default=False)
	priority = models.PositiveIntegerField(
		default=1,
		help_text="Priority of the notification, higher number means higher priority",
	)
	level = models.CharField(
		max_length=10,
		choices=LEVEL_CHOICES,
		default="info",
		help_text="Notification level",
	)
	redirect_to = models.CharField(max_length=255, blank=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:  # noqa: D106
		ordering = ("-created_at",)
		indexes = (models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),)

	def __str__(self) -> str:
		return f"Notification for {self.user.username}: {self.message}"

	def save(self, *args, **kwargs) -> None:  # noqa: ANN002, ANN003
		"""Save the notification, mirroring new ones by SMS once the surrounding transaction commits."""
		is_new = not self.pk
		super().save(*args, **kwargs)

		if is_new and ENV.SEND_SMS_MESSAGES and self.user.phone:
			body, phone = f"New notification: {self.message}", self.user.phone
			transaction.on_commit(lambda: get_sms_service().send_sms(body, phone))

	@classmethod
	def notify(
		cls,
		users: Iterable[models.Model],
		message: str,
		level: str = "info",
		redirect_to: str = "",
		priority: int = 1,
	) -> list[Notification]:
		"""
		Create the same notification for several users.

		Each row goes through ``save``, so SMS mirroring applies to every recipient.

		Args:
			users: Users to notify.
			message: Notification message.
			level: Notification level (info, success, warning, error).
			redirect_to: Front-end route the notification links to.
			priority: Priority level, higher is more important.

		Returns:
			list[Notification]: The created notifications.
		"""
		message = message[: cls._meta.get_field("message").max_length]

		return [
			cls.objects.create(user=user, message=message, level=level, redirect_to=redirect_to, priority=priority)
			for user in users
		]
