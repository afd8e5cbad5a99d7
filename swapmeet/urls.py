from django.contrib import admin
from django.urls import include, path
from rest_framework import routers

from .views import HealthCheckViewSet

router = routers.DefaultRouter()

router.register(r"health", HealthCheckViewSet, basename="health")

urlpatterns = [
	path("admin/", admin.site.urls),
	path("", include(router.urls)),
	path("", include("core.urls")),
	path("", include("exchange.urls")),
]
