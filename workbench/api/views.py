"""
Workbench API ViewSets.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from workbench.exceptions import WorkbenchError
from workbench.models import CalendarEntry, WorkItem
from workbench.services import capacity
from workbench.services.calendar import CalendarAggregator
from workbench.services.suggestions import SuggestionEngine
from workbench.workdays import next_working_day
from .serializers import (
    CalendarEntrySerializer,
    CalendarQuerySerializer,
    CapacityQuerySerializer,
    ReleaseSerializer,
    ScheduleSerializer,
    WorkItemSerializer,
)


class WorkItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for WorkItem.

    list: List work items (?status=waiting to filter)
    create: Create a new work item
    retrieve: Get a specific work item by UUID
    update: Update a work item
    destroy: Delete a work item
    suggestions: Ranked start/end candidates
    capacity: Capacity window for a given start
    schedule: Commit the item to a date range
    release: Give the slot back
    """

    permission_classes = [IsAuthenticated]
    queryset = WorkItem.objects.all()
    serializer_class = WorkItemSerializer
    lookup_field = "uuid"

    def get_queryset(self):
        queryset = super().get_queryset()
        status_filter = self.request.query_params.get("status")
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    @action(detail=True, methods=["get"])
    def suggestions(self, request, uuid=None):
        """
        Ranked schedule candidates.

        GET /api/workbench/work-items/{uuid}/suggestions/
        """
        item = self.get_object()
        scheduled = WorkItem.objects.committed().exclude(pk=item.pk)

        suggestions = SuggestionEngine().propose(item, scheduled)

        return Response(
            {
                "suggestions": [suggestion.as_dict() for suggestion in suggestions],
                "manual_entry_required": not suggestions,
            }
        )

    @action(detail=True, methods=["get"])
    def capacity(self, request, uuid=None):
        """
        Per-day utilization if the item started on `start`.

        GET /api/workbench/work-items/{uuid}/capacity/?start=2024-03-04
        """
        item = self.get_object()
        serializer = CapacityQuerySerializer(data=request.query_params)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        if not item.duration_days:
            error = WorkbenchError("MISSING_DURATION", work_item=str(item.uuid))
            return Response(error.as_dict(), status=status.HTTP_400_BAD_REQUEST)

        start = next_working_day(
            serializer.validated_data.get("start") or timezone.localdate()
        )
        daily = capacity.roster_capacity()
        window = capacity.build_capacity_window(
            start,
            item,
            WorkItem.objects.committed(),
            daily.daily_hours,
            daily.employee_count,
        )

        return Response({**window.as_dict(), "fallback": daily.fallback})

    @action(detail=True, methods=["post"])
    def schedule(self, request, uuid=None):
        """
        Commit the item to a date range.

        POST /api/workbench/work-items/{uuid}/schedule/
        {
            "start_date": "2024-03-04",
            "end_date": "2024-03-08"
        }
        """
        item = self.get_object()
        serializer = ScheduleSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            item.schedule(
                start_date=serializer.validated_data["start_date"],
                end_date=serializer.validated_data["end_date"],
                user=request.user,
            )
        except WorkbenchError as e:
            return Response(e.as_dict(), status=status.HTTP_400_BAD_REQUEST)

        return Response(WorkItemSerializer(item).data)

    @action(detail=True, methods=["post"])
    def release(self, request, uuid=None):
        """
        Give the slot back.

        POST /api/workbench/work-items/{uuid}/release/
        {
            "reason": "Client postponed"  // optional
        }
        """
        item = self.get_object()
        serializer = ReleaseSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            item.release(reason=serializer.validated_data["reason"], user=request.user)
        except WorkbenchError as e:
            return Response(e.as_dict(), status=status.HTTP_400_BAD_REQUEST)

        return Response(WorkItemSerializer(item).data)


class CalendarViewSet(viewsets.ViewSet):
    """
    ViewSet for the unified calendar.

    list: Merged events (?role=, ?category=, ?day=, ?start=&end=)
    create: Create a manual entry
    update: Replace a manual entry
    partial_update: Update fields of a manual entry
    destroy: Delete a manual entry

    Every call answers with {"events": [...], "counts": {...}}. Counts are
    taken before the category filter so hidden categories still show totals.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"[0-9]+"

    def get_aggregator(self) -> CalendarAggregator:
        return CalendarAggregator()

    def _categories(self, request) -> list[str]:
        categories = []
        for value in request.query_params.getlist("category"):
            categories.extend(part.strip() for part in value.split(",") if part.strip())
        return categories

    def _render(self, request, events, status_code=status.HTTP_200_OK):
        query = CalendarQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        params = query.validated_data
        if params.get("role"):
            events = CalendarAggregator.filter_by_role(events, params["role"])
        if params.get("day"):
            events = CalendarAggregator.events_for_day(events, params["day"].isoformat())
        if params.get("start") or params.get("end"):
            start = params.get("start") or params.get("end")
            end = params.get("end") or params.get("start")
            events = CalendarAggregator.events_between(
                events, start.isoformat(), end.isoformat()
            )

        counts = CalendarAggregator.count_by_category(events)
        events = CalendarAggregator.filter_by_category(events, self._categories(request))

        return Response(
            {"events": [event.as_dict() for event in events], "counts": counts},
            status=status_code,
        )

    def list(self, request):
        """
        GET /api/workbench/calendar/?role=operator&category=production,purchasing
        """
        return self._render(request, self.get_aggregator().get_all_events())

    def create(self, request):
        """
        POST /api/workbench/calendar/
        {
            "title": "Vehicle reception",
            "date": "2024-03-04",
            "category": "client_vehicle",
            "event_type": "reception"
        }
        """
        serializer = CalendarEntrySerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            events = self.get_aggregator().create_event(
                serializer.validated_data, created_by=request.user.get_username()
            )
        except DjangoValidationError as e:
            return Response(e.message_dict, status=status.HTTP_400_BAD_REQUEST)

        return self._render(request, events, status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=False):
        """
        PUT/PATCH /api/workbench/calendar/{pk}/
        """
        serializer = CalendarEntrySerializer(data=request.data, partial=partial)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            events = self.get_aggregator().update_event(pk, serializer.validated_data)
        except CalendarEntry.DoesNotExist:
            raise NotFound(f"Calendar entry {pk} not found")
        except DjangoValidationError as e:
            return Response(e.message_dict, status=status.HTTP_400_BAD_REQUEST)

        return self._render(request, events)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        """
        DELETE /api/workbench/calendar/{pk}/
        """
        try:
            events = self.get_aggregator().delete_event(pk)
        except CalendarEntry.DoesNotExist:
            raise NotFound(f"Calendar entry {pk} not found")

        return self._render(request, events)
