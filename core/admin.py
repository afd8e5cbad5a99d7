from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Notification, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
	fieldsets = (*BaseUserAdmin.fieldsets, ("Contact", {"fields": ("city", "phone_country_code", "phone_number")}))
	list_display = ("username", "email", "city", "is_staff")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
	list_display = ("user", "message", "level", "is_read", "created_at")
	list_filter = ("level", "is_read")
	search_fields = ("user__username", "message")
