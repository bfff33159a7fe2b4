"""
Workbench REST API.

Provides DRF ViewSets for:
- WorkItem (full CRUD + suggestions, capacity, schedule, release)
- Calendar (merged, role-filtered events + manual entry CRUD)
"""
