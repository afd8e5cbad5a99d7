import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("listings", "0001_initial"),
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="ExchangeRequest",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("target_kind", models.CharField(choices=[("item", "Item"), ("skill", "Skill")], max_length=10)),
				("proposal", models.CharField(help_text="What the requester offers in return", max_length=500)),
				("message", models.TextField(help_text="Message accompanying the request", max_length=1000)),
				("proposed_at", models.DateTimeField(help_text="Proposed date and time for the exchange")),
				(
					"status",
					models.CharField(
						choices=[
							("pending", "Pending"),
							("accepted", "Accepted"),
							("refused", "Refused"),
							("cancelled", "Cancelled"),
							("completed", "Completed"),
						],
						default="pending",
						help_text="Current status of the exchange request",
						max_length=20,
					),
				),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"item",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.PROTECT,
						related_name="exchange_requests",
						to="listings.item",
					),
				),
				(
					"owner",
					models.ForeignKey(
						help_text="Owner of the requested offer",
						on_delete=django.db.models.deletion.CASCADE,
						related_name="received_exchange_requests",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"requester",
					models.ForeignKey(
						help_text="Member who made the request",
						on_delete=django.db.models.deletion.CASCADE,
						related_name="sent_exchange_requests",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"skill",
					models.ForeignKey(
						blank=True,
						null=True,
						on_delete=django.db.models.deletion.PROTECT,
						related_name="exchange_requests",
						to="listings.skill",
					),
				),
			],
			options={
				"ordering": ("-created_at",),
				"indexes": [
					models.Index(fields=["requester", "status"], name="exchange_requester_status_idx"),
					models.Index(fields=["owner", "status"], name="exchange_owner_status_idx"),
					models.Index(fields=["-created_at"], name="exchange_created_idx"),
				],
				"constraints": [
					models.CheckConstraint(
						condition=models.Q(
							models.Q(("item__isnull", False), ("skill__isnull", True), ("target_kind", "item")),
							models.Q(("item__isnull", True), ("skill__isnull", False), ("target_kind", "skill")),
							_connector="OR",
						),
						name="exchange_request_single_target",
					),
					models.CheckConstraint(
						condition=models.Q(("requester", models.F("owner")), _negated=True),
						name="exchange_request_distinct_parties",
					),
				],
			},
		),
		migrations.CreateModel(
			name="ExchangeHistory",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				(
					"event_type",
					models.CharField(
						choices=[
							("created", "Created"),
							("accepted", "Accepted"),
							("refused", "Refused"),
							("cancelled", "Cancelled"),
							("review_submitted", "Review Submitted"),
							("review_edited", "Review Edited"),
							("review_hidden", "Review Hidden"),
							("completed", "Completed"),
						],
						help_text="Type of event that occurred",
						max_length=30,
					),
				),
				("message", models.TextField(blank=True, help_text="Human-readable description of this event")),
				("created_at", models.DateTimeField(auto_now_add=True, help_text="When this event occurred")),
				(
					"actor",
					models.ForeignKey(
						blank=True,
						help_text="User who triggered this event (None for system events)",
						null=True,
						on_delete=django.db.models.deletion.SET_NULL,
						related_name="exchange_actions",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"exchange_request",
					models.ForeignKey(
						help_text="The exchange request this event is for",
						on_delete=django.db.models.deletion.CASCADE,
						related_name="history",
						to="exchange.exchangerequest",
					),
				),
			],
			options={
				"verbose_name": "Exchange History",
				"verbose_name_plural": "Exchange Histories",
				"ordering": ("created_at", "id"),
				"indexes": [
					models.Index(fields=["exchange_request", "created_at"], name="exchange_history_request_idx"),
					models.Index(fields=["event_type"], name="exchange_history_event_idx"),
				],
			},
		),
		migrations.CreateModel(
			name="Message",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("content", models.TextField(max_length=1000)),
				("is_read", models.BooleanField(default=False)),
				("sent_at", models.DateTimeField(auto_now_add=True)),
				(
					"exchange_request",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="messages",
						to="exchange.exchangerequest",
					),
				),
				(
					"recipient",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="received_messages",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"sender",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="sent_messages",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ("sent_at", "id"),
				"indexes": [
					models.Index(fields=["exchange_request", "sent_at"], name="message_request_sent_idx"),
					models.Index(fields=["recipient", "is_read"], name="message_recipient_read_idx"),
				],
				"constraints": [
					models.CheckConstraint(
						condition=models.Q(("content", ""), _negated=True),
						name="message_content_not_empty",
					),
					models.CheckConstraint(
						condition=models.Q(("sender", models.F("recipient")), _negated=True),
						name="message_distinct_parties",
					),
				],
			},
		),
		migrations.CreateModel(
			name="Review",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				(
					"rating",
					models.PositiveSmallIntegerField(
						validators=[
							django.core.validators.MinValueValidator(1),
							django.core.validators.MaxValueValidator(5),
						],
					),
				),
				("comment", models.TextField()),
				("is_visible", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("modified_at", models.DateTimeField(blank=True, null=True)),
				(
					"author",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="reviews_given",
						to=settings.AUTH_USER_MODEL,
					),
				),
				(
					"exchange_request",
					models.ForeignKey(
						on_delete=django.db.models.deletion.PROTECT,
						related_name="reviews",
						to="exchange.exchangerequest",
					),
				),
				(
					"subject",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="reviews_received",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ("-created_at", "-id"),
				"indexes": [models.Index(fields=["subject", "is_visible"], name="review_subject_visible_idx")],
				"constraints": [
					models.UniqueConstraint(
						fields=("exchange_request", "author"),
						name="review_one_per_author_per_exchange",
					),
					models.CheckConstraint(
						condition=models.Q(("rating__gte", 1), ("rating__lte", 5)),
						name="review_rating_range",
					),
					models.CheckConstraint(
						condition=models.Q(("author", models.F("subject")), _negated=True),
						name="review_distinct_parties",
					),
				],
			},
		),
	]
