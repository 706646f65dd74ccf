"""
Core app URL configuration.

Generic authorization endpoints used by the front end to decide which
actions to offer, plus the shared confirm transition.

URL prefix (registered in ``insightdesk/urls.py``)::

    path('api/core/', include('core.urls'))

Endpoint summary
----------------
POST /api/core/authorize/                   — One decision → {"allowed": bool}.
GET  /api/core/abilities/{entity}/          — List-level ability map.
GET  /api/core/abilities/{entity}/{id}/     — Ability map for one record.
POST /api/core/confirm/{entity}/{id}/       — Confirm a confirmable record.
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    # ── Decisions ────────────────────────────────────────────────────
    path(
        "authorize/",
        views.AuthorizeView.as_view(),
        name="authorize",
    ),
    path(
        "abilities/<str:entity>/",
        views.EntityAbilitiesView.as_view(),
        name="entity-abilities",
    ),
    path(
        "abilities/<str:entity>/<int:pk>/",
        views.RecordAbilitiesView.as_view(),
        name="record-abilities",
    ),

    # ── Confirmation ─────────────────────────────────────────────────
    path(
        "confirm/<str:entity>/<int:pk>/",
        views.ConfirmView.as_view(),
        name="confirm",
    ),
]
