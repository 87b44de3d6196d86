import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="IdentifierRecord",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("identifier", models.CharField(max_length=255, unique=True)),
                (
                    "owner_id",
                    models.CharField(
                        db_index=True,
                        help_text="Principal allowed to manage this identifier",
                        max_length=255,
                    ),
                ),
                (
                    "document",
                    models.JSONField(help_text="Controller document (DID document JSON)"),
                ),
                (
                    "key_pairs",
                    models.JSONField(
                        default=list,
                        help_text="Key pairs in creation order, current and historical",
                    ),
                ),
                ("version", models.PositiveIntegerField(default=1)),
            ],
            options={
                "db_table": "identifiers",
                "ordering": ["-created_at"],
            },
        ),
    ]
