"""
Service layer for Tasks feature.

``TaskAssignmentService`` runs the assignment workflow: resolve the team and
its assignees, validate the payload, write the task and record it in the
project/team assignment log. The task and log writes are not one transaction;
when recording fails the task is deleted again before the error is raised.

``TaskService`` covers the remaining task operations for project managers
and team members.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from pydantic import ValidationError

from common.exceptions import (
    AssignmentLogError,
    RecordNotFoundError,
    ServiceError,
    ValidationFailedError,
)
from project.models import AssignedProjectLog, Project, Team
from task.models import Task
from task.schemas import TaskCreateSchema

User = get_user_model()
logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND_MESSAGE = 'Project not found in database'


def prune_assignment_logs(task_ids: set[str], pairs: set[tuple[str, str]]) -> None:
    """Remove ``task_ids`` from the logs of the given (project_id, team_id) pairs."""
    with transaction.atomic():
        for project_id, team_id in pairs:
            log = (
                AssignedProjectLog.objects.select_for_update()
                .filter(project_id=project_id, team_id=team_id)
                .first()
            )
            if log is None:
                continue
            remaining = [i for i in log.tasks_ids if i not in task_ids]
            if remaining != log.tasks_ids:
                log.tasks_ids = remaining
                log.save(update_fields=['tasks_ids', 'updated_at'])


@dataclass
class AssignmentResult:
    """Outcome of an assignment request.

    ``task`` is ``None`` when the project does not exist; that case is still
    reported as a success with ``PROJECT_NOT_FOUND_MESSAGE``.
    """

    message: str
    task: Task | None = None


class TaskAssignmentService:
    """Assign tasks to a whole team or to a single user."""

    REQUIRED_FIELDS = ('project_id', 'team_id', 'title', 'description', 'deadline')

    @classmethod
    def assign_task(
        cls,
        manager,
        project_id: str,
        team_id: str,
        assigned_to: str,
        title: str,
        description: str,
        deadline: str,
    ) -> AssignmentResult:
        payload = {
            'project_id': project_id,
            'team_id': team_id,
            'title': title,
            'description': description,
            'deadline': deadline,
        }
        if any(not payload[field] for field in cls.REQUIRED_FIELDS):
            raise ValidationFailedError('All fields are required.')

        task = None
        try:
            team = Team.objects.filter(team_id=team_id, manager=manager).first()
            if team is None:
                raise RecordNotFoundError('Team', team_id)

            assignees = cls.resolve_assignees(team, assigned_to)
            data = cls.validate_payload(title, description, deadline)

            project = Project.objects.filter(project_id=project_id, manager=manager).first()
            if project is None:
                logger.info(f'Task assignment skipped, project {project_id} not found')
                return AssignmentResult(message=PROJECT_NOT_FOUND_MESSAGE)

            task = Task.objects.create(
                title=data.title,
                description=data.description,
                project=project,
                team=team,
                deadline=data.deadline,
                status=Task.STATUS_PENDING,
            )
            task.assigned_to.set(assignees)

            cls.record_in_log(task)

            if project.mark_in_progress():
                logger.info(f'Project {project_id} moved to {Project.STATUS_IN_PROGRESS}')

            logger.info(
                f'Task {task.task_id} assigned in {project_id}/{team_id} '
                f'to {len(assignees)} users'
            )
            return AssignmentResult(message='Task assigned successfully!', task=task)

        except AssignmentLogError:
            cls.discard_task(task)
            raise
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f'Error assigning task: {str(e)}', exc_info=True)
            cls.discard_task(task)
            raise ServiceError('Failed to assign task.') from e

    @staticmethod
    def resolve_assignees(team: Team, assigned_to: str) -> list:
        """Return every team member for an empty ``assigned_to``, else the named team member account."""
        assigned_to = (assigned_to or '').strip()
        if not assigned_to:
            return list(team.members.all())

        user = User.objects.filter(user_id=assigned_to, user_type=User.TYPE_USER).first()
        if user is None:
            raise RecordNotFoundError('User', assigned_to, message='Assigned user not found.')
        return [user]

    @staticmethod
    def validate_payload(title: str, description: str, deadline: str) -> TaskCreateSchema:
        try:
            return TaskCreateSchema.model_validate(
                {'title': title, 'description': description, 'deadline': deadline}
            )
        except ValidationError as exc:
            raise ValidationFailedError.from_messages(
                [error['msg'] for error in exc.errors()]
            ) from exc

    @classmethod
    def record_in_log(cls, task: Task) -> AssignedProjectLog:
        """Append ``task`` to the assignment log of its project and team."""
        with transaction.atomic():
            log = (
                AssignedProjectLog.objects.select_for_update()
                .filter(project_id=task.project_id, team_id=task.team_id)
                .first()
            )
            if log is None:
                raise AssignmentLogError('Assigned project log not found.', status_code=404)

            if not cls.update_log(log, [*log.tasks_ids, task.task_id]):
                raise AssignmentLogError('Failed to update the assigned project log.')

        return log

    @staticmethod
    def update_log(log: AssignedProjectLog, tasks_ids: list[str]) -> bool:
        updated = AssignedProjectLog.objects.filter(pk=log.pk).update(
            tasks_ids=tasks_ids,
            updated_at=timezone.now(),
        )
        if updated:
            log.tasks_ids = tasks_ids
        return bool(updated)

    @staticmethod
    def discard_task(task: Task | None) -> None:
        """Delete a task whose assignment could not be completed."""
        if task is None or task.pk is None:
            return
        try:
            prune_assignment_logs({task.task_id}, {(task.project_id, task.team_id)})
            task.delete()
            logger.warning(f'Removed task {task.task_id} after failed assignment')
        except Exception:
            logger.exception(f'Could not remove task {task.task_id} after failed assignment')


class TaskService:
    """Task queries and edits outside the assignment workflow."""

    UPDATABLE_FIELDS = ('title', 'description', 'deadline', 'status')

    @staticmethod
    def get_project_tasks(manager, project_id: str, status: str | None = None) -> QuerySet[Task]:
        project = Project.objects.filter(project_id=project_id, manager=manager).first()
        if project is None:
            raise RecordNotFoundError('Project', project_id)

        queryset = Task.objects.filter(project=project).prefetch_related('assigned_to')
        if status:
            queryset = queryset.filter(status=status)
        return queryset.order_by('task_id')

    @staticmethod
    def get_task(manager, task_id: str) -> Task:
        task = Task.objects.filter(task_id=task_id, project__manager=manager).first()
        if task is None:
            raise RecordNotFoundError('Task', task_id)
        return task

    @classmethod
    def update_task(cls, manager, task_id: str, **changes) -> Task:
        task = cls.get_task(manager, task_id)

        update_fields = []
        for field in cls.UPDATABLE_FIELDS:
            value = changes.get(field)
            if value is not None:
                setattr(task, field, value)
                update_fields.append(field)

        if update_fields:
            task.save(update_fields=[*update_fields, 'updated_at'])
            logger.info(f'Task {task_id} updated: {", ".join(update_fields)}')

        return task

    @staticmethod
    def delete_tasks(manager, task_ids: Sequence[str]) -> dict:
        """Delete tasks and remove their identifiers from the assignment logs."""
        normalized = [i for i in dict.fromkeys(t.strip() for t in task_ids) if i]
        if not normalized:
            raise ValidationFailedError('Please select at least one task to delete.')

        with transaction.atomic():
            tasks = Task.objects.filter(task_id__in=normalized, project__manager=manager)
            found = set(tasks.values_list('task_id', flat=True))
            pairs = set(tasks.values_list('project_id', 'team_id'))
            prune_assignment_logs(found, pairs)
            tasks.delete()

        not_found = [task_id for task_id in normalized if task_id not in found]
        logger.info(f'Deleted tasks {sorted(found)} for {manager.user_id}')
        return {'deleted_count': len(found), 'not_found': not_found}

    @staticmethod
    def get_member_tasks(user, status: str | None = None) -> QuerySet[Task]:
        queryset = Task.objects.filter(assigned_to=user).prefetch_related('assigned_to')
        if status:
            queryset = queryset.filter(status=status)
        return queryset.order_by('deadline', 'task_id')

    @staticmethod
    def update_member_task_status(user, task_id: str, status: str) -> Task:
        task = Task.objects.filter(task_id=task_id, assigned_to=user).first()
        if task is None:
            raise RecordNotFoundError('Task', task_id)

        task.status = status
        task.save(update_fields=['status', 'updated_at'])
        logger.info(f'Task {task_id} set to {status} by {user.user_id}')
        return task
