from django.db import migrations, models

import bolos.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Bolo",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=bolos.models.generate_bolo_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("bolo_type", models.CharField(choices=[("person", "Person"), ("vehicle", "Vehicle"), ("general", "General")], default="general", max_length=20, verbose_name="Type")),
                ("priority", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("critical", "Critical")], default="medium", max_length=20, verbose_name="Priority")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("description", models.TextField(verbose_name="Description")),
                ("tags", models.JSONField(blank=True, default=list, verbose_name="Tags")),
                ("people", models.JSONField(blank=True, default=list, verbose_name="People (cids)")),
                ("vehicles", models.JSONField(blank=True, default=list, verbose_name="Vehicles")),
                ("report_ids", models.JSONField(blank=True, default=list, verbose_name="Report IDs")),
                ("status", models.CharField(choices=[("active", "Active"), ("suspended", "Suspended"), ("closed", "Closed")], db_index=True, default="active", max_length=20, verbose_name="Status")),
                ("expires_at", models.DateTimeField(blank=True, null=True, verbose_name="Expires At")),
                ("created_by_cid", models.PositiveIntegerField(verbose_name="Created By CID")),
                ("created_by_name", models.CharField(max_length=120, verbose_name="Created By")),
                ("ref_keys", models.TextField(blank=True, default="", editable=False)),
            ],
            options={
                "verbose_name": "BOLO",
                "verbose_name_plural": "BOLOs",
                "ordering": ["-created_at"],
            },
        ),
    ]
