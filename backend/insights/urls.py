"""
Insights app URL configuration (prefix ``/api/insights/``).

    GET    /infos/                            → InsightInfoViewSet.list
    POST   /infos/                            → InsightInfoViewSet.create
    GET    /infos/{id}/                       → InsightInfoViewSet.retrieve
    PATCH  /infos/{id}/                       → InsightInfoViewSet.partial_update
    DELETE /infos/{id}/                       → InsightInfoViewSet.destroy
    GET    /infos/{info_pk}/items/            → InsightItemViewSet.list
    POST   /infos/{info_pk}/items/            → InsightItemViewSet.create
    GET    /infos/{info_pk}/items/{id}/       → InsightItemViewSet.retrieve
    PATCH  /infos/{info_pk}/items/{id}/       → InsightItemViewSet.partial_update
    DELETE /infos/{info_pk}/items/{id}/       → InsightItemViewSet.destroy
    GET    /items/{id}/stats/                 → InsightItemStatsView.get
    PUT    /items/{id}/stats/                 → InsightItemStatsView.put
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_nested.routers import NestedDefaultRouter

from .views import InsightInfoViewSet, InsightItemStatsView, InsightItemViewSet

app_name = "insights"

router = DefaultRouter()
router.register(prefix=r"infos", viewset=InsightInfoViewSet, basename="info")

infos_router = NestedDefaultRouter(
    parent_router=router,
    parent_prefix=r"infos",
    lookup="info",
)
infos_router.register(prefix=r"items", viewset=InsightItemViewSet, basename="info-item")

urlpatterns = [
    path("items/<int:pk>/stats/", InsightItemStatsView.as_view(), name="item-stats"),
    path("", include(router.urls)),
    path("", include(infos_router.urls)),
]
