from django.contrib import admin

from .models import Item, Skill


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
	list_display = ("title", "owner", "category", "available", "created_at")
	list_filter = ("available", "category")
	search_fields = ("title", "owner__username")


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
	list_display = ("title", "owner", "level", "available", "created_at")
	list_filter = ("available", "level")
	search_fields = ("title", "owner__username")
