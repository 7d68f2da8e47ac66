import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import citizenvote.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Governorate",
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
                ("name", models.CharField(max_length=200)),
            ],
            options={
                "db_table": "governorates",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Party",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(
                        default=1, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("name", models.CharField(blank=True, default="", max_length=200)),
                (
                    "threshold",
                    models.PositiveIntegerField(
                        default=0, help_text="Party-wide supporter goal"
                    ),
                ),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Party",
                "verbose_name_plural": "Party",
                "db_table": "party",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("id", 1)), name="party_singleton"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="District",
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
                ("name", models.CharField(max_length=200)),
                (
                    "official_voters",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Eligible voters registered in the district",
                    ),
                ),
                (
                    "governorate",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="districts",
                        to="citizenvote.governorate",
                    ),
                ),
            ],
            options={
                "db_table": "districts",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Candidate",
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
                ("name", models.CharField(max_length=200)),
                (
                    "target",
                    models.PositiveIntegerField(default=0, help_text="Supporter goal"),
                ),
                (
                    "district",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="candidates",
                        to="citizenvote.district",
                    ),
                ),
            ],
            options={
                "db_table": "candidates",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Assistant",
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
                ("name", models.CharField(max_length=200)),
                (
                    "phone",
                    models.CharField(
                        blank=True,
                        default="",
                        max_length=32,
                        validators=[citizenvote.models.validate_phone_number],
                    ),
                ),
                ("area_tags", models.CharField(blank=True, default="", max_length=500)),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True, default=django.utils.timezone.now
                    ),
                ),
                (
                    "candidate",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="assistants",
                        to="citizenvote.candidate",
                    ),
                ),
            ],
            options={
                "db_table": "assistants",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Voter",
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
                ("full_name", models.CharField(max_length=255)),
                ("dob", models.DateField(blank=True, null=True)),
                (
                    "polling_center",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "electoral_card",
                    models.CharField(blank=True, max_length=64, null=True),
                ),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                (
                    "assistant",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="voters",
                        to="citizenvote.assistant",
                    ),
                ),
                (
                    "candidate",
                    models.ForeignKey(
                        db_constraint=False,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="voters",
                        to="citizenvote.candidate",
                    ),
                ),
                (
                    "district",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="voters",
                        to="citizenvote.district",
                    ),
                ),
            ],
            options={
                "db_table": "voters",
                "indexes": [
                    models.Index(fields=["electoral_card"], name="idx_voters_card"),
                    models.Index(
                        fields=["full_name", "dob"], name="idx_voters_name_dob"
                    ),
                    models.Index(fields=["created_at"], name="idx_voters_created"),
                    models.Index(
                        fields=["candidate", "created_at"],
                        name="idx_voters_candidate_created",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(
                            ("electoral_card__isnull", False),
                            models.Q(("electoral_card", ""), _negated=True),
                        ),
                        fields=("electoral_card",),
                        name="uniq_voters_electoral_card",
                    )
                ],
            },
        ),
    ]
