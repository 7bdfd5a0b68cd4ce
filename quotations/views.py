from django.shortcuts import get_object_or_404
from rest_framework import permissions
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from carriers.towing import TowingResolver
from quotations.models import QuotationCommodityItem
from quotations.models import QuotationRequest
from quotations.serializers import CommodityItemSerializer
from quotations.serializers import QuotationRequestSerializer
from quotations.serializers import TowingDecisionSerializer


class QuotationViewSet(viewsets.ReadOnlyModelViewSet):
    """API endpoint that allows quotations to be viewed."""

    queryset = QuotationRequest.objects.select_related("carrier", "pod_port")
    serializer_class = QuotationRequestSerializer
    permission_classes = [permissions.IsAuthenticated]


class CommodityItemViewSet(viewsets.ReadOnlyModelViewSet):
    """API endpoint that allows the cargo lines of a quotation to be viewed,
    with the reasoning behind their towing decision."""

    serializer_class = CommodityItemSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        quotation = get_object_or_404(QuotationRequest, pk=self.kwargs["quotation_id"])
        return QuotationCommodityItem.objects.filter(quotation=quotation)

    @action(detail=True, methods=["get"])
    def towing(self, request, *args, **kwargs):
        item = self.get_object()
        decision = TowingResolver().explain(item.category, item.pk)
        return Response(TowingDecisionSerializer(decision).data)
