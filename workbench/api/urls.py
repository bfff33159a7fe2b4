"""
Workbench API URLs.

Include this in your project's urlpatterns:

    path('api/workbench/', include('workbench.api.urls')),
"""

from rest_framework.routers import DefaultRouter

from .views import CalendarViewSet, WorkItemViewSet

router = DefaultRouter()
router.register("work-items", WorkItemViewSet)
router.register("calendar", CalendarViewSet, basename="calendar")

urlpatterns = router.urls
