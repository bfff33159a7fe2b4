import decimal
import uuid

import django.core.validators
import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


WORK_ITEM_STATUS_CHOICES = [
    ("waiting", "Waiting"),
    ("scheduled", "Scheduled"),
    ("in_progress", "In progress"),
    ("completed", "Completed"),
    ("on_hold", "On hold"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # ══════════════════════════════════════════════════════════════
        # WORK ITEM
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="WorkItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Quote number this work comes from",
                        max_length=50,
                        verbose_name="Reference",
                    ),
                ),
                ("client_name", models.CharField(blank=True, max_length=200, verbose_name="Client")),
                (
                    "vehicle_model",
                    models.CharField(blank=True, max_length=200, verbose_name="Vehicle model"),
                ),
                (
                    "total_hours",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Estimated labor hours",
                        max_digits=8,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Total hours",
                    ),
                ),
                (
                    "total_days",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Leave empty to derive from hours (8 h per day)",
                        null=True,
                        verbose_name="Total working days",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=WORK_ITEM_STATUS_CHOICES,
                        db_index=True,
                        default="waiting",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                (
                    "priority",
                    models.PositiveSmallIntegerField(
                        default=5,
                        help_text="0-10, higher is more urgent",
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(10),
                        ],
                        verbose_name="Priority",
                    ),
                ),
                ("requires_materials", models.BooleanField(default=False, verbose_name="Requires materials")),
                ("materials_ready", models.BooleanField(default=False, verbose_name="Materials ready")),
                ("requires_design", models.BooleanField(default=False, verbose_name="Requires design")),
                ("design_ready", models.BooleanField(default=False, verbose_name="Design ready")),
                (
                    "start_date",
                    models.DateField(blank=True, db_index=True, null=True, verbose_name="Start"),
                ),
                ("end_date", models.DateField(blank=True, null=True, verbose_name="End")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
            ],
            options={
                "verbose_name": "Work item",
                "verbose_name_plural": "Work items",
                "db_table": "workbench_work_item",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status", "start_date"],
                        name="workbench_wi_status_start_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalWorkItem",
            fields=[
                (
                    "id",
                    models.BigIntegerField(
                        auto_created=True, blank=True, db_index=True, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        db_index=True, default=uuid.uuid4, editable=False, verbose_name="UUID"
                    ),
                ),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Quote number this work comes from",
                        max_length=50,
                        verbose_name="Reference",
                    ),
                ),
                ("client_name", models.CharField(blank=True, max_length=200, verbose_name="Client")),
                (
                    "vehicle_model",
                    models.CharField(blank=True, max_length=200, verbose_name="Vehicle model"),
                ),
                (
                    "total_hours",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Estimated labor hours",
                        max_digits=8,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Total hours",
                    ),
                ),
                (
                    "total_days",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        help_text="Leave empty to derive from hours (8 h per day)",
                        null=True,
                        verbose_name="Total working days",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=WORK_ITEM_STATUS_CHOICES,
                        db_index=True,
                        default="waiting",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                (
                    "priority",
                    models.PositiveSmallIntegerField(
                        default=5,
                        help_text="0-10, higher is more urgent",
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(10),
                        ],
                        verbose_name="Priority",
                    ),
                ),
                ("requires_materials", models.BooleanField(default=False, verbose_name="Requires materials")),
                ("materials_ready", models.BooleanField(default=False, verbose_name="Materials ready")),
                ("requires_design", models.BooleanField(default=False, verbose_name="Requires design")),
                ("design_ready", models.BooleanField(default=False, verbose_name="Design ready")),
                (
                    "start_date",
                    models.DateField(blank=True, db_index=True, null=True, verbose_name="Start"),
                ),
                ("end_date", models.DateField(blank=True, null=True, verbose_name="End")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "created_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="Created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="Updated at"),
                ),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Work item",
                "verbose_name_plural": "historical Work items",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        # ══════════════════════════════════════════════════════════════
        # EMPLOYEE
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Employee",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                (
                    "role",
                    models.CharField(
                        db_index=True,
                        help_text="Role identifier, e.g. 'operator' or 'shop_supervisor'",
                        max_length=50,
                        verbose_name="Role",
                    ),
                ),
                (
                    "weekly_hours",
                    models.DecimalField(
                        decimal_places=2,
                        default=decimal.Decimal("40"),
                        max_digits=5,
                        validators=[django.core.validators.MinValueValidator(0)],
                        verbose_name="Weekly hours",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
            ],
            options={
                "verbose_name": "Employee",
                "verbose_name_plural": "Employees",
                "db_table": "workbench_employee",
                "ordering": ["name"],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # CALENDAR ENTRY
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="CalendarEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("date", models.DateField(db_index=True, verbose_name="Date")),
                (
                    "end_date",
                    models.DateField(
                        blank=True,
                        help_text="Only for events spanning several days",
                        null=True,
                        verbose_name="End date",
                    ),
                ),
                ("time", models.TimeField(blank=True, null=True, verbose_name="Time")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("production", "Production"),
                            ("client_vehicle", "Client / vehicles"),
                            ("purchasing", "Purchasing"),
                            ("quoting", "Quotes"),
                            ("general", "General"),
                        ],
                        default="general",
                        max_length=20,
                        verbose_name="Category",
                    ),
                ),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("reception", "Vehicle reception"),
                            ("delivery", "Vehicle delivery"),
                            ("review", "Review"),
                            ("appointment", "Appointment"),
                            ("project_start", "Project start"),
                            ("project_end", "Project end"),
                            ("project_span", "Project in production"),
                            ("expected_delivery", "Expected order delivery"),
                            ("order_follow_up", "Order follow-up"),
                            ("quote_follow_up", "Quote follow-up"),
                            ("expiry", "Quote expiry"),
                            ("meeting", "Meeting"),
                            ("reminder", "Reminder"),
                            ("note", "Note"),
                        ],
                        default="note",
                        max_length=30,
                        verbose_name="Event type",
                    ),
                ),
                (
                    "source_id",
                    models.CharField(
                        blank=True,
                        help_text="ID of a related record (lead, project...), when applicable",
                        max_length=100,
                        verbose_name="Source record",
                    ),
                ),
                (
                    "metadata",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="client_name, vehicle_model, plate, project_number, lead_id...",
                        verbose_name="Metadata",
                    ),
                ),
                ("visible_roles", models.JSONField(default=list, verbose_name="Visible to roles")),
                ("created_by", models.CharField(blank=True, max_length=255, verbose_name="Created by")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
            ],
            options={
                "verbose_name": "Calendar entry",
                "verbose_name_plural": "Calendar entries",
                "db_table": "workbench_calendar_entry",
                "ordering": ["date", "time"],
            },
        ),
    ]
