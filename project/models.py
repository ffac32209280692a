"""
Project Models - Projects, teams and project/team assignment logs.

References between records use the readable business identifiers
(``Project-00001``, ``Team-00001``, ``User-00001``) as foreign key targets.
"""

from django.conf import settings
from django.db import models

from common.config import IdentifierConfig
from common.models import BusinessIdMixin


class Project(BusinessIdMixin, models.Model):
    """Project owned by a project manager."""

    STATUS_PENDING = 'Pending'
    STATUS_IN_PROGRESS = 'In Progress'
    STATUS_COMPLETED = 'Completed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    business_id_field = 'project_id'
    business_id_prefix = IdentifierConfig.PROJECT_PREFIX

    project_id = models.CharField(
        max_length=IdentifierConfig.MAX_LENGTH,
        unique=True,
        editable=False,
        verbose_name='Project ID',
    )
    title = models.CharField(
        max_length=200,
        db_index=True,
        verbose_name='Title',
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description',
    )
    deadline = models.DateField(
        null=True,
        blank=True,
        verbose_name='Deadline',
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
        verbose_name='Status',
    )
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        to_field='user_id',
        on_delete=models.CASCADE,
        related_name='managed_projects',
        verbose_name='Project manager',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        verbose_name = 'Project'
        verbose_name_plural = 'Projects'
        ordering = ['-updated_at']
        indexes = [
            models.Index(
                fields=['manager', 'status'],
                name='idx_proj_manager_status',
            ),
        ]

    def __str__(self) -> str:
        return f'{self.project_id} {self.title} ({self.status})'

    def mark_in_progress(self) -> bool:
        """Move a pending project to In Progress; returns whether it changed."""
        if self.status != self.STATUS_PENDING:
            return False
        self.status = self.STATUS_IN_PROGRESS
        self.save(update_fields=['status', 'updated_at'])
        return True


class Team(BusinessIdMixin, models.Model):
    """Team of users owned by a project manager."""

    business_id_field = 'team_id'
    business_id_prefix = IdentifierConfig.TEAM_PREFIX

    team_id = models.CharField(
        max_length=IdentifierConfig.MAX_LENGTH,
        unique=True,
        editable=False,
        verbose_name='Team ID',
    )
    team_name = models.CharField(
        max_length=200,
        verbose_name='Team name',
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='teams',
        blank=True,
        verbose_name='Members',
    )
    team_leader = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        to_field='user_id',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='led_teams',
        verbose_name='Team leader',
    )
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        to_field='user_id',
        on_delete=models.CASCADE,
        related_name='managed_teams',
        verbose_name='Project manager',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'teams'
        verbose_name = 'Team'
        verbose_name_plural = 'Teams'
        ordering = ['team_id']

    def __str__(self) -> str:
        return f'{self.team_id} {self.team_name}'

    def member_ids(self) -> list[str]:
        return [member.user_id for member in self.members.all()]


class AssignedProjectLog(BusinessIdMixin, models.Model):
    """Records a project assigned to a team and the tasks created under it."""

    business_id_field = 'assign_project_id'
    business_id_prefix = IdentifierConfig.ASSIGNMENT_LOG_PREFIX

    assign_project_id = models.CharField(
        max_length=IdentifierConfig.MAX_LENGTH,
        unique=True,
        editable=False,
        verbose_name='Assignment ID',
    )
    project = models.ForeignKey(
        'Project',
        to_field='project_id',
        on_delete=models.CASCADE,
        related_name='assignment_logs',
        verbose_name='Project',
    )
    team = models.ForeignKey(
        'Team',
        to_field='team_id',
        on_delete=models.CASCADE,
        related_name='assignment_logs',
        verbose_name='Team',
    )
    deadline = models.DateField(
        null=True,
        blank=True,
        verbose_name='Deadline',
    )
    tasks_ids = models.JSONField(
        default=list,
        verbose_name='Task IDs',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'assigned_project_logs'
        verbose_name = 'Assigned project log'
        verbose_name_plural = 'Assigned project logs'
        unique_together = [['project', 'team']]
        ordering = ['assign_project_id']

    def __str__(self) -> str:
        return f'{self.assign_project_id}: {self.project_id} → {self.team_id}'
