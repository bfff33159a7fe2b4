"""
Workbench API Serializers.
"""

from rest_framework import serializers

from workbench.models import WorkItem
from workbench.protocols.calendar import EVENT_TYPES_BY_CATEGORY, EventCategory, EventType


class WorkItemSerializer(serializers.ModelSerializer):
    """Serializer for WorkItem model."""

    duration_days = serializers.IntegerField(read_only=True)
    is_ready = serializers.BooleanField(read_only=True)

    class Meta:
        model = WorkItem
        fields = [
            "id",
            "uuid",
            "reference",
            "client_name",
            "vehicle_model",
            "total_hours",
            "total_days",
            "duration_days",
            "status",
            "priority",
            "requires_materials",
            "materials_ready",
            "requires_design",
            "design_ready",
            "is_ready",
            "start_date",
            "end_date",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "uuid",
            "status",
            "start_date",
            "end_date",
            "created_at",
            "updated_at",
        ]


class ScheduleSerializer(serializers.Serializer):
    """Serializer for WorkItem schedule action."""

    start_date = serializers.DateField(required=True)
    end_date = serializers.DateField(required=True)

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError(
                {"end_date": "End date cannot be before the start date."}
            )
        return attrs


class ReleaseSerializer(serializers.Serializer):
    """Serializer for WorkItem release action."""

    reason = serializers.CharField(required=False, allow_blank=True, default="")


class CapacityQuerySerializer(serializers.Serializer):
    """Query parameters of the capacity action."""

    start = serializers.DateField(required=False, help_text="Defaults to today")


class CalendarQuerySerializer(serializers.Serializer):
    """Query parameters of the calendar list (category is read separately)."""

    role = serializers.CharField(required=False)
    day = serializers.DateField(required=False)
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get("start"), attrs.get("end")
        if start and end and end < start:
            raise serializers.ValidationError({"end": "End cannot be before start."})
        return attrs


class CalendarEntrySerializer(serializers.Serializer):
    """
    Input of a manual calendar entry.

    visible_roles may be omitted (defaults from the category) but not sent
    empty.
    """

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateField()
    end_date = serializers.DateField(required=False, allow_null=True)
    time = serializers.TimeField(required=False, allow_null=True)
    category = serializers.ChoiceField(choices=EventCategory.choices, required=False)
    event_type = serializers.ChoiceField(choices=EventType.choices, required=False)
    source_id = serializers.CharField(max_length=100, required=False, allow_blank=True)
    metadata = serializers.DictField(required=False)
    visible_roles = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False,
        allow_empty=False,
    )

    def validate(self, attrs):
        start, end = attrs.get("date"), attrs.get("end_date")
        if start and end and end < start:
            raise serializers.ValidationError(
                {"end_date": "End date cannot be before the start date."}
            )
        category, event_type = attrs.get("category"), attrs.get("event_type")
        if category and event_type and event_type not in EVENT_TYPES_BY_CATEGORY[category]:
            raise serializers.ValidationError(
                {"event_type": "This event type does not belong to the category."}
            )
        return attrs
