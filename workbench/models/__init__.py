"""
Workbench Models.

Records owned by the workshop app and read by the engine:
- WorkItem: Schedulable unit of production work
- Employee: Roster entry for the default capacity backend
- CalendarEntry: Manually created calendar event
"""

from workbench.models.calendar_entry import CalendarEntry
from workbench.models.employee import Employee
from workbench.models.work_item import COMMITTED_STATUSES, WorkItem, WorkItemStatus

__all__ = [
    "WorkItem",
    "WorkItemStatus",
    "COMMITTED_STATUSES",
    "Employee",
    "CalendarEntry",
]
