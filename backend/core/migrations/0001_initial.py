from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuditEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("entity_type", models.CharField(choices=[("unit", "Unit"), ("call", "Dispatch Call"), ("report", "Report"), ("bolo", "BOLO"), ("evidence", "Evidence Item"), ("case_request", "Case Request"), ("case", "Case")], max_length=20, verbose_name="Entity Type")),
                ("entity_id", models.CharField(max_length=40, verbose_name="Entity ID")),
                ("seq", models.PositiveIntegerField(verbose_name="Sequence")),
                ("ts", models.DateTimeField(verbose_name="Timestamp")),
                ("actor_cid", models.PositiveIntegerField(help_text="0 is the system (dispatch) actor.", verbose_name="Actor CID")),
                ("actor_name", models.CharField(max_length=120, verbose_name="Actor Name")),
                ("action", models.CharField(choices=[("Létrehozva", "Created"), ("Mentve", "Saved"), ("Leadva", "Submitted"), ("Frissítve", "Updated"), ("Láttam", "Sighting"), ("Felfüggesztve", "Suspended"), ("Újraaktiválva", "Reactivated"), ("Lezárva", "Closed"), ("Megjegyzés", "Note"), ("Átadva", "Transferred"), ("Lepecsételve", "Sealed"), ("Linkelve", "Linked"), ("Leválasztva", "Unlinked"), ("Riasztás beérkezett", "Call received"), ("Elfogadta a hívást", "Call accepted"), ("Státusz", "Status changed"), ("Tag felvéve", "Member added"), ("Tag eltávolítva", "Member removed"), ("Jóváhagyva", "Approved"), ("Elutasítva", "Rejected")], max_length=40, verbose_name="Action")),
                ("note", models.TextField(blank=True, default="", verbose_name="Note")),
                ("details", models.JSONField(blank=True, default=dict, help_text="Action-specific payload (holder, changes, status …).", verbose_name="Details")),
            ],
            options={
                "verbose_name": "Audit Event",
                "verbose_name_plural": "Audit Events",
                "ordering": ["-seq"],
                "indexes": [models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx")],
                "constraints": [models.UniqueConstraint(fields=("entity_type", "entity_id", "seq"), name="audit_event_unique_seq")],
            },
        ),
    ]
