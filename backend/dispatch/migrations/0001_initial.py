from django.db import migrations, models

import dispatch.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DispatchCall",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=dispatch.models.generate_call_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=20, verbose_name="Code")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("location", models.CharField(max_length=255, verbose_name="Location")),
                ("origin_x", models.FloatField(blank=True, null=True)),
                ("origin_y", models.FloatField(blank=True, null=True)),
                ("origin_z", models.FloatField(blank=True, null=True)),
                ("status", models.CharField(choices=[("new", "New"), ("accepted", "Accepted"), ("en_route", "En Route"), ("on_scene", "On Scene"), ("closed", "Closed")], db_index=True, default="new", max_length=20, verbose_name="Status")),
                ("assigned_unit_id", models.CharField(blank=True, db_index=True, max_length=40, null=True, verbose_name="Assigned Unit")),
                ("report_summary", models.CharField(blank=True, default="", max_length=255, verbose_name="Report Summary")),
                ("report_id", models.CharField(blank=True, max_length=40, null=True, verbose_name="Report")),
            ],
            options={
                "verbose_name": "Dispatch Call",
                "verbose_name_plural": "Dispatch Calls",
                "ordering": ["-created_at"],
            },
        ),
    ]
