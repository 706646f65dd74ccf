"""
Access app URL configuration.

Included from ``insightdesk.urls`` as ``path('api/access/', include('access.urls'))``.

Endpoint Map
------------
    GET    /grants/                 → AccessGrantViewSet.list
    POST   /grants/                 → AccessGrantViewSet.create
    GET    /grants/{id}/            → AccessGrantViewSet.retrieve
    PATCH  /grants/{id}/            → AccessGrantViewSet.partial_update
    POST   /grants/{id}/revoke/     → AccessGrantViewSet.revoke

The per-user listing ``/api/accounts/users/{user_pk}/grants/`` is
registered in ``accounts.urls`` on the users router.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AccessGrantViewSet

app_name = "access"

router = DefaultRouter()
router.register(r"grants", AccessGrantViewSet, basename="grant")

urlpatterns = [
    path("", include(router.urls)),
]
