import django.db.models.deletion
from django.db import migrations, models

import units.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Unit",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=units.models.generate_unit_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("callsign", models.CharField(max_length=20, unique=True, verbose_name="Callsign")),
                ("label", models.CharField(max_length=120, verbose_name="Label")),
                ("status", models.CharField(choices=[("available", "Available"), ("unavailable", "Unavailable")], db_index=True, default="available", max_length=20, verbose_name="Status")),
            ],
            options={
                "verbose_name": "Unit",
                "verbose_name_plural": "Units",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Officer",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("cid", models.PositiveIntegerField(primary_key=True, serialize=False, verbose_name="CID")),
                ("name", models.CharField(max_length=120, verbose_name="Name")),
                ("on_duty", models.BooleanField(default=False, verbose_name="On Duty")),
                ("unit_joined_at", models.DateTimeField(blank=True, null=True, verbose_name="Joined Unit At")),
                ("unit", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="members", to="units.unit", verbose_name="Unit")),
            ],
            options={
                "verbose_name": "Officer",
                "verbose_name_plural": "Officers",
                "ordering": ["name", "cid"],
            },
        ),
    ]
