from django.db import migrations, models

import evidence.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EvidenceItem",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=evidence.models.generate_evidence_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("label", models.CharField(max_length=255, verbose_name="Label")),
                ("evidence_type", models.CharField(blank=True, choices=[("photo", "Photo"), ("video", "Video"), ("dna", "DNA"), ("fingerprint", "Fingerprint"), ("weapon", "Weapon"), ("item", "Item"), ("other", "Other")], max_length=20, null=True, verbose_name="Type")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("status", models.CharField(choices=[("open", "Open"), ("sealed", "Sealed")], db_index=True, default="open", max_length=20, verbose_name="Status")),
                ("holder", models.CharField(default="Rendőrség", max_length=120, verbose_name="Holder")),
                ("report_id", models.CharField(blank=True, db_index=True, max_length=40, null=True, verbose_name="Linked Report")),
                ("case_id", models.CharField(blank=True, db_index=True, max_length=40, null=True, verbose_name="Linked Case")),
                ("tags", models.JSONField(blank=True, default=list, verbose_name="Tags")),
            ],
            options={
                "verbose_name": "Evidence Item",
                "verbose_name_plural": "Evidence Items",
                "ordering": ["-created_at"],
            },
        ),
    ]
