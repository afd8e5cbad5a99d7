from django.contrib import admin

from .models import ExchangeHistory, ExchangeRequest, Message, Review


class ExchangeHistoryInline(admin.TabularInline):
	model = ExchangeHistory
	extra = 0
	can_delete = False
	readonly_fields = ("event_type", "actor", "message", "created_at")


@admin.register(ExchangeRequest)
class ExchangeRequestAdmin(admin.ModelAdmin):
	list_display = ("id", "requester", "owner", "target_kind", "status", "proposed_at", "created_at")
	list_filter = ("status", "target_kind")
	search_fields = ("requester__username", "owner__username", "item__title", "skill__title")
	readonly_fields = ("status", "created_at", "updated_at")
	inlines = (ExchangeHistoryInline,)


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
	list_display = ("exchange_request", "sender", "recipient", "is_read", "sent_at")
	list_filter = ("is_read",)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
	list_display = ("exchange_request", "author", "subject", "rating", "is_visible", "created_at")
	list_filter = ("rating", "is_visible")
	search_fields = ("author__username", "subject__username", "comment")
