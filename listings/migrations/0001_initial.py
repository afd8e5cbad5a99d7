import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
	]

	operations = [
		migrations.CreateModel(
			name="Item",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("title", models.CharField(max_length=100)),
				("description", models.TextField(blank=True, max_length=1000)),
				("category", models.CharField(blank=True, max_length=50)),
				(
					"wanted_in_return",
					models.CharField(
						blank=True,
						help_text="What the owner would like to receive in exchange",
						max_length=255,
					),
				),
				(
					"available",
					models.BooleanField(
						default=True,
						help_text="Whether the offer can still be requested; cleared when an exchange is accepted",
					),
				),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"mode",
					models.CharField(
						choices=[("loan", "Loan"), ("gift", "Gift"), ("swap", "Swap")],
						default="swap",
						max_length=10,
					),
				),
				(
					"owner",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="%(class)ss",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ("-created_at",),
				"abstract": False,
				"indexes": [models.Index(fields=["owner", "available"], name="item_owner_available_idx")],
			},
		),
		migrations.CreateModel(
			name="Skill",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("title", models.CharField(max_length=100)),
				("description", models.TextField(blank=True, max_length=1000)),
				("category", models.CharField(blank=True, max_length=50)),
				(
					"wanted_in_return",
					models.CharField(
						blank=True,
						help_text="What the owner would like to receive in exchange",
						max_length=255,
					),
				),
				(
					"available",
					models.BooleanField(
						default=True,
						help_text="Whether the offer can still be requested; cleared when an exchange is accepted",
					),
				),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"level",
					models.CharField(
						choices=[("beginner", "Beginner"), ("intermediate", "Intermediate"), ("expert", "Expert")],
						default="intermediate",
						max_length=20,
					),
				),
				(
					"owner",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="%(class)ss",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ("-created_at",),
				"abstract": False,
				"indexes": [models.Index(fields=["owner", "available"], name="skill_owner_available_idx")],
			},
		),
	]
