from django.db import migrations, models

import cases.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CaseRequest",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=cases.models.generate_case_request_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("report_id", models.CharField(db_index=True, max_length=40, verbose_name="Report")),
                ("report_title", models.CharField(blank=True, default="", max_length=255, verbose_name="Report Title")),
                ("note", models.TextField(blank=True, default="", verbose_name="Note")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], db_index=True, default="pending", max_length=20, verbose_name="Status")),
                ("created_by_cid", models.PositiveIntegerField(verbose_name="Requested By (CID)")),
                ("created_by_name", models.CharField(max_length=120, verbose_name="Requested By")),
                ("decided_by_cid", models.PositiveIntegerField(blank=True, null=True, verbose_name="Decided By (CID)")),
                ("decided_by_name", models.CharField(blank=True, default="", max_length=120, verbose_name="Decided By")),
                ("decided_at", models.DateTimeField(blank=True, null=True, verbose_name="Decided At")),
                ("case_id", models.CharField(blank=True, max_length=40, null=True, verbose_name="Case")),
                ("case_number", models.CharField(blank=True, max_length=40, null=True, verbose_name="Case Number")),
            ],
            options={
                "verbose_name": "Case Request",
                "verbose_name_plural": "Case Requests",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Case",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=cases.models.generate_case_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("case_number", models.CharField(max_length=40, unique=True, verbose_name="Case Number")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("status", models.CharField(choices=[("open", "Open"), ("in_progress", "In Progress"), ("prosecution", "Prosecution"), ("closed", "Closed")], db_index=True, default="open", max_length=20, verbose_name="Status")),
                ("priority", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("critical", "Critical")], default="medium", max_length=20, verbose_name="Priority")),
                ("location", models.CharField(default="—", max_length=255, verbose_name="Location")),
                ("tags", models.JSONField(blank=True, default=list, verbose_name="Tags")),
                ("linked_report_ids", models.JSONField(blank=True, default=list, verbose_name="Linked Reports")),
                ("linked_evidence_ids", models.JSONField(blank=True, default=list, verbose_name="Linked Evidence")),
                ("linked_bolo_ids", models.JSONField(blank=True, default=list, verbose_name="Linked BOLOs")),
                ("created_by_cid", models.PositiveIntegerField(verbose_name="Created By (CID)")),
                ("created_by_name", models.CharField(max_length=120, verbose_name="Created By")),
            ],
            options={
                "verbose_name": "Case",
                "verbose_name_plural": "Cases",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CaseNumberSequence",
            fields=[
                ("year", models.PositiveIntegerField(primary_key=True, serialize=False, verbose_name="Year")),
                ("last_value", models.PositiveIntegerField(default=0, verbose_name="Last Value")),
            ],
            options={
                "verbose_name": "Case Number Sequence",
                "verbose_name_plural": "Case Number Sequences",
            },
        ),
    ]
