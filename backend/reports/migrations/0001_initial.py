from django.db import migrations, models

import reports.models


def seed_tag_catalog(apps, schema_editor):
    from core.constants import engine_setting

    TagCatalogEntry = apps.get_model("reports", "TagCatalogEntry")
    TagCatalogEntry.objects.bulk_create(
        TagCatalogEntry(name=name, position=index)
        for index, name in enumerate(engine_setting("DEFAULT_TAG_CATALOG"))
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Report",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("id", models.CharField(default=reports.models.generate_report_id, editable=False, max_length=40, primary_key=True, serialize=False)),
                ("report_type", models.CharField(choices=[("identity_check", "Identity Check"), ("action", "Action"), ("incident", "Incident"), ("investigation", "Investigation"), ("dispatch", "Dispatch"), ("other", "Other")], db_index=True, default="other", max_length=20, verbose_name="Type")),
                ("title", models.CharField(max_length=255, verbose_name="Title")),
                ("location", models.CharField(default="—", max_length=255, verbose_name="Location")),
                ("tags", models.JSONField(blank=True, default=list, verbose_name="Tags")),
                ("involved", models.JSONField(blank=True, default=list, help_text="List of {cid, name, role} objects.", verbose_name="Involved Parties")),
                ("vehicles", models.JSONField(blank=True, default=list, help_text="Upper-case licence plates.", verbose_name="Vehicles")),
                ("summary", models.CharField(blank=True, default="", max_length=255, verbose_name="Summary")),
                ("full_text", models.TextField(default="<p></p>", verbose_name="Full Text (HTML)")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("submitted", "Submitted")], db_index=True, default="draft", max_length=20, verbose_name="Status")),
                ("author_cid", models.PositiveIntegerField(verbose_name="Author CID")),
                ("author_name", models.CharField(max_length=120, verbose_name="Author Name")),
                ("last_editor_cid", models.PositiveIntegerField(verbose_name="Last Editor CID")),
                ("last_editor_name", models.CharField(max_length=120, verbose_name="Last Editor Name")),
                ("submitted_at", models.DateTimeField(blank=True, null=True, verbose_name="Submitted At")),
                ("search_index", models.TextField(blank=True, default="", editable=False)),
                ("ref_keys", models.TextField(blank=True, default="", editable=False)),
            ],
            options={
                "verbose_name": "Report",
                "verbose_name_plural": "Reports",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TagCatalogEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=60, unique=True, verbose_name="Tag")),
                ("position", models.PositiveIntegerField(default=0, verbose_name="Position")),
            ],
            options={
                "verbose_name": "Tag Catalog Entry",
                "verbose_name_plural": "Tag Catalog",
                "ordering": ["position", "id"],
            },
        ),
        migrations.RunPython(seed_tag_catalog, migrations.RunPython.noop),
    ]
