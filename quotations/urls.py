from django.urls import include
from django.urls import path
from rest_framework import routers

from quotations import views

api_router = routers.DefaultRouter()
api_router.register(r"quotations", views.QuotationViewSet, basename="quotation")

commodity_item_list = views.CommodityItemViewSet.as_view({"get": "list"})
commodity_item_detail = views.CommodityItemViewSet.as_view({"get": "retrieve"})
commodity_item_towing = views.CommodityItemViewSet.as_view({"get": "towing"})

urlpatterns = [
    path("", include(api_router.urls)),
    path(
        "quotations/<int:quotation_id>/items/",
        commodity_item_list,
        name="commodity_item-list",
    ),
    path(
        "quotations/<int:quotation_id>/items/<int:pk>/",
        commodity_item_detail,
        name="commodity_item-detail",
    ),
    path(
        "quotations/<int:quotation_id>/items/<int:pk>/towing/",
        commodity_item_towing,
        name="commodity_item-towing",
    ),
]
