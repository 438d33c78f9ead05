from rest_framework import serializers

from ..models import GradeItem


class GradeItemSerializer(serializers.ModelSerializer):
    itemtype = serializers.CharField(source="item_type", read_only=True)

    class Meta:
        model = GradeItem
        fields = ["id", "name", "itemtype"]
        read_only_fields = fields
