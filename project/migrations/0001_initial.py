# Generated manually for project module

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "project_id",
                    models.CharField(
                        editable=False, max_length=32, unique=True, verbose_name="Project ID"
                    ),
                ),
                (
                    "title",
                    models.CharField(db_index=True, max_length=200, verbose_name="Title"),
                ),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("deadline", models.DateField(blank=True, null=True, verbose_name="Deadline")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("In Progress", "In Progress"),
                            ("Completed", "Completed"),
                        ],
                        db_index=True,
                        default="Pending",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "manager",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="managed_projects",
                        to=settings.AUTH_USER_MODEL,
                        to_field="user_id",
                        verbose_name="Project manager",
                    ),
                ),
            ],
            options={
                "verbose_name": "Project",
                "verbose_name_plural": "Projects",
                "db_table": "projects",
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(
                        fields=["manager", "status"], name="idx_proj_manager_status"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Team",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "team_id",
                    models.CharField(
                        editable=False, max_length=32, unique=True, verbose_name="Team ID"
                    ),
                ),
                ("team_name", models.CharField(max_length=200, verbose_name="Team name")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "manager",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="managed_teams",
                        to=settings.AUTH_USER_MODEL,
                        to_field="user_id",
                        verbose_name="Project manager",
                    ),
                ),
                (
                    "members",
                    models.ManyToManyField(
                        blank=True,
                        related_name="teams",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Members",
                    ),
                ),
                (
                    "team_leader",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="led_teams",
                        to=settings.AUTH_USER_MODEL,
                        to_field="user_id",
                        verbose_name="Team leader",
                    ),
                ),
            ],
            options={
                "verbose_name": "Team",
                "verbose_name_plural": "Teams",
                "db_table": "teams",
                "ordering": ["team_id"],
            },
        ),
        migrations.CreateModel(
            name="AssignedProjectLog",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "assign_project_id",
                    models.CharField(
                        editable=False, max_length=32, unique=True, verbose_name="Assignment ID"
                    ),
                ),
                ("deadline", models.DateField(blank=True, null=True, verbose_name="Deadline")),
                ("tasks_ids", models.JSONField(default=list, verbose_name="Task IDs")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignment_logs",
                        to="project.project",
                        to_field="project_id",
                        verbose_name="Project",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assignment_logs",
                        to="project.team",
                        to_field="team_id",
                        verbose_name="Team",
                    ),
                ),
            ],
            options={
                "verbose_name": "Assigned project log",
                "verbose_name_plural": "Assigned project logs",
                "db_table": "assigned_project_logs",
                "ordering": ["assign_project_id"],
                "unique_together": {("project", "team")},
            },
        ),
    ]
