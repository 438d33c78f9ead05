from rest_framework import serializers


class GroupInfoSerializer(serializers.Serializer):
    """A group as shown next to a participant.

    Visibility and participation are group settings; they are only rendered
    when the serializer context has ``include_settings`` set.
    """

    SETTINGS_FIELDS = ("visibility", "participation")

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    id_number = serializers.CharField(read_only=True)
    visibility = serializers.IntegerField(read_only=True)
    participation = serializers.BooleanField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not self.context.get("include_settings"):
            for field in self.SETTINGS_FIELDS:
                data.pop(field, None)
        return data


class ParticipantSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="user_id", read_only=True)
    username = serializers.CharField(read_only=True)
    full_name = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    groups = GroupInfoSerializer(many=True, read_only=True)
    groups_label = serializers.CharField(read_only=True)


__all__ = [
    "GroupInfoSerializer",
    "ParticipantSerializer",
]
