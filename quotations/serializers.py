from rest_framework import serializers

from quotations.models import QuotationCommodityItem
from quotations.models import QuotationRequest


class QuotationRequestSerializer(serializers.ModelSerializer):
    carrier = serializers.SlugRelatedField(slug_field="code", read_only=True)
    pod_port = serializers.SlugRelatedField(slug_field="code", read_only=True)

    class Meta:
        model = QuotationRequest
        fields = [
            "id",
            "request_number",
            "pol",
            "pod",
            "service_type",
            "carrier",
            "pod_port",
            "vessel_name",
            "vessel_class",
            "currency",
            "total_amount",
        ]


class CommodityItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuotationCommodityItem
        fields = [
            "id",
            "line_number",
            "category",
            "commodity_type",
            "quantity",
            "stack_unit_count",
            "length_cm",
            "width_cm",
            "height_cm",
            "cbm",
            "weight_kg",
            "flags",
            "relationship_type",
            "related_item_id",
            "chargeable_lm",
            "carrier_rule_meta",
        ]


class InspectedItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    line_number = serializers.IntegerField()
    category = serializers.CharField(allow_null=True)
    role = serializers.CharField()


class TowingDecisionSerializer(serializers.Serializer):
    applies = serializers.BooleanField()
    reason = serializers.CharField()
    category = serializers.CharField(allow_null=True)
    commodity_item_id = serializers.IntegerField(allow_null=True)
    inspected = InspectedItemSerializer(many=True)
