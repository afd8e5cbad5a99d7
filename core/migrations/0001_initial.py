import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("auth", "0012_alter_user_first_name_max_length"),
	]

	operations = [
		migrations.CreateModel(
			name="User",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("password", models.CharField(max_length=128, verbose_name="password")),
				("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
				(
					"is_superuser",
					models.BooleanField(
						default=False,
						help_text="Designates that this user has all permissions without explicitly assigning them.",
						verbose_name="superuser status",
					),
				),
				(
					"username",
					models.CharField(
						error_messages={"unique": "A user with that username already exists."},
						help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.",
						max_length=150,
						unique=True,
						validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
						verbose_name="username",
					),
				),
				("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
				("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
				("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
				(
					"is_staff",
					models.BooleanField(
						default=False,
						help_text="Designates whether the user can log into this admin site.",
						verbose_name="staff status",
					),
				),
				(
					"is_active",
					models.BooleanField(
						default=True,
						help_text=(
							"Designates whether this user should be treated as active. "
							"Unselect this instead of deleting accounts."
						),
						verbose_name="active",
					),
				),
				("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"city",
					models.CharField(
						blank=True,
						help_text="City where the member usually meets to exchange",
						max_length=100,
					),
				),
				(
					"phone_country_code",
					models.CharField(blank=True, help_text="User's cellphone country code", max_length=8),
				),
				("phone_number", models.CharField(blank=True, help_text="User's cellphone number", max_length=31)),
				(
					"groups",
					models.ManyToManyField(
						blank=True,
						help_text=(
							"The groups this user belongs to. A user will get all permissions granted to each of "
							"their groups."
						),
						related_name="user_set",
						related_query_name="user",
						to="auth.group",
						verbose_name="groups",
					),
				),
				(
					"user_permissions",
					models.ManyToManyField(
						blank=True,
						help_text="Specific permissions for this user.",
						related_name="user_set",
						related_query_name="user",
						to="auth.permission",
						verbose_name="user permissions",
					),
				),
			],
			options={
				"verbose_name": "user",
				"verbose_name_plural": "users",
				"abstract": False,
			},
			managers=[
				("objects", django.contrib.auth.models.UserManager()),
			],
		),
		migrations.CreateModel(
			name="Notification",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("message", models.CharField(max_length=255)),
				("is_read", models.BooleanField(default=False)),
				(
					"priority",
					models.PositiveIntegerField(
						default=1,
						help_text="Priority of the notification, higher number means higher priority",
					),
				),
				(
					"level",
					models.CharField(
						choices=[("info", "Info"), ("success", "Success"), ("warning", "Warning"), ("error", "Error")],
						default="info",
						help_text="Notification level",
						max_length=10,
					),
				),
				("redirect_to", models.CharField(blank=True, max_length=255)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				(
					"user",
					models.ForeignKey(
						on_delete=django.db.models.deletion.CASCADE,
						related_name="notifications",
						to=settings.AUTH_USER_MODEL,
					),
				),
			],
			options={
				"ordering": ("-created_at",),
				"indexes": [models.Index(fields=["user", "is_read"], name="notification_user_read_idx")],
			},
		),
	]
