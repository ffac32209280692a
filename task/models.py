"""
Task Models - Tasks assigned to a team or to a single team member.
"""

from django.conf import settings
from django.db import models

from common.config import IdentifierConfig
from common.models import BusinessIdMixin


class Task(BusinessIdMixin, models.Model):
    """Task created under a project/team assignment."""

    STATUS_PENDING = 'Pending'
    STATUS_IN_PROGRESS = 'In Progress'
    STATUS_COMPLETED = 'Completed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    business_id_field = 'task_id'
    business_id_prefix = IdentifierConfig.TASK_PREFIX

    task_id = models.CharField(
        max_length=IdentifierConfig.MAX_LENGTH,
        unique=True,
        editable=False,
        verbose_name='Task ID',
    )
    title = models.CharField(
        max_length=200,
        verbose_name='Title',
    )
    description = models.TextField(
        verbose_name='Description',
    )
    project = models.ForeignKey(
        'project.Project',
        to_field='project_id',
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name='Project',
    )
    team = models.ForeignKey(
        'project.Team',
        to_field='team_id',
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name='Team',
    )
    assigned_to = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='assigned_tasks',
        blank=True,
        verbose_name='Assigned to',
    )
    deadline = models.DateField(
        verbose_name='Deadline',
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
        verbose_name='Status',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        verbose_name = 'Task'
        verbose_name_plural = 'Tasks'
        ordering = ['task_id']
        indexes = [
            models.Index(
                fields=['project', 'team'],
                name='idx_task_project_team',
            ),
        ]

    def __str__(self) -> str:
        return f'{self.task_id} {self.title} ({self.status})'

    def assignee_ids(self) -> list[str]:
        return [user.user_id for user in self.assigned_to.all()]
