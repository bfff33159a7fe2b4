"""
Workbench Signals.

Notification delivery and other apps hook into scheduling through these
signals instead of being called directly.

Signals:
    work_item_scheduled: A work item was committed to a date range
    work_item_released: A work item gave its slot back (status WAITING)
    calendar_entry_changed: A manual calendar entry was created/updated/deleted
"""

from django.dispatch import Signal

# Sent by WorkItem.schedule()
# Args: work_item, start_date, end_date, user
work_item_scheduled = Signal()

# Sent by WorkItem.release()
# Args: work_item, reason, user
work_item_released = Signal()

# Sent by CalendarAggregator create/update/delete
# Args: entry_id, action ("created", "updated", "deleted")
calendar_entry_changed = Signal()

__all__ = ["work_item_scheduled", "work_item_released", "calendar_entry_changed"]
