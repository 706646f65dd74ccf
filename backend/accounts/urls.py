"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and designed to be included
in the project-level ``urls.py`` as::

    path('api/accounts/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /auth/login/                 → LoginView
    POST   /auth/token/refresh/         → TokenRefreshView (SimpleJWT)

Current User Profile ("Me")
    GET    /me/                         → MeView

User Management (admin / superadmin)
    GET    /users/                      → UserViewSet.list
    GET    /users/{id}/                 → UserViewSet.retrieve
    DELETE /users/{id}/                 → UserViewSet.destroy
    POST   /users/{id}/assign-roles/    → UserViewSet.assign_roles
    GET    /users/{user_pk}/grants/     → access.views.UserAccessGrantViewSet.list

Role Management (admin / superadmin)
    GET    /roles/                      → RoleViewSet.list
    POST   /roles/                      → RoleViewSet.create
    GET    /roles/{id}/                 → RoleViewSet.retrieve
    PATCH  /roles/{id}/                 → RoleViewSet.partial_update
    DELETE /roles/{id}/                 → RoleViewSet.destroy
    POST   /roles/{id}/assign-permissions/ → RoleViewSet.assign_permissions

Utility
    GET    /permissions/                → PermissionListView
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_nested.routers import NestedDefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from access.views import UserAccessGrantViewSet

from .views import (
    LoginView,
    MeView,
    PermissionListView,
    RoleViewSet,
    UserViewSet,
)

app_name = "accounts"

router = DefaultRouter()
router.register(r"users", UserViewSet, basename="user")
router.register(r"roles", RoleViewSet, basename="role")

users_router = NestedDefaultRouter(router, r"users", lookup="user")
users_router.register(r"grants", UserAccessGrantViewSet, basename="user-grant")

urlpatterns = [
    # ── Authentication ───────────────────────────────────────────────
    path("auth/login/", LoginView.as_view(), name="login"),
    path(
        "auth/token/refresh/",
        TokenRefreshView.as_view(),
        name="token-refresh",
    ),

    # ── Current User (Me) ───────────────────────────────────────────
    path("me/", MeView.as_view(), name="me"),

    # ── Utility ──────────────────────────────────────────────────────
    path("permissions/", PermissionListView.as_view(), name="permission-list"),

    # ── Router-registered viewsets (users/, roles/, users/{pk}/grants/)
    path("", include(router.urls)),
    path("", include(users_router.urls)),
]
